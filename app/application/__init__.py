"""
Application layer - Use cases and business logic orchestration.

This layer contains:
- Application services (orchestrate domain + infrastructure)
- The checkout workflow

No direct dependencies on frameworks (FastAPI, etc.)
"""
