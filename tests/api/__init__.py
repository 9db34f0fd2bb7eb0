"""API tests package.

End-to-end tests through the FastAPI app using TestClient:
- Authentication (header, query token, expired vs invalid)
- Authorization (path/method policies, role requirements)
- Policy administration endpoints
- Envelope format and HTTP status codes
"""
