"""
Tests for the Order Submission Service

Tests are organized by functionality:
- test_domain.py: Order aggregate invariants and value objects
- test_order_service.py: Checkout orchestration (assembly, persistence, fan-out)
- test_repositories.py: SQLAlchemy repositories and Unit of Work against SQLite
- test_delivery_notifier.py / test_reservation_publisher.py: downstream adapters
- api/test_orders_api.py: Checkout endpoint
"""
