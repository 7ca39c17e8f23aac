"""HTTP API - application factory, routers and error mapping."""
