"""
handlers/ - Presentation Layer
================================
HTTP request handlers. Each handler validates the request, delegates to the
appropriate Repository or Service, and renders the outcome as a JSON response.
Handlers are the only layer that logs error detail or picks status codes.
"""
