from clinic_queue.models.patient_models import Patient
from clinic_queue.models.booking_models import Booking
from clinic_queue.models.system_models import AuditLog

__all__ = ['Patient', 'Booking', 'AuditLog']
