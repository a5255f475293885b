"""
handlers/ - Presentation Layer
================================
FastAPI routers. Each handler parses the request, delegates to the
appropriate Service, and serializes the response back to JSON.
No business logic lives here.
"""
