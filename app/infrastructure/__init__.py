"""
Infrastructure layer for the Chef Pantry marketplace API.

This layer contains the implementation details for external systems integration:
- Database (SQLAlchemy repositories and unit of work)
- Authentication (Supabase access tokens)
- Email delivery (SMTP or Resend)
- Notification event handlers and the HTTP API

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
