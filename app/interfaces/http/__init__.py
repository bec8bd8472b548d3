"""HTTP delivery layer: dependencies and routers."""
