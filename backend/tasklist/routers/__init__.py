"""HTTP routers. Each route unpacks the request and calls one handler."""
