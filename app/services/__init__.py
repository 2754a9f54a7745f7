"""
Services package - adapters to external systems.
"""
from app.services.delivery_notifier import DeliveryNotifier
from app.services.reservation_publisher import ReservationPublisher, create_redis_client
from app.services.uri_composer import UriComposer

__all__ = ['DeliveryNotifier', 'ReservationPublisher', 'create_redis_client', 'UriComposer']
