"""Server side: the ASGI routing surface and response emission."""
