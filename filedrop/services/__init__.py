"""Service layer - storage backends."""
