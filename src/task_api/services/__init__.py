"""Application operations used by the routers."""
