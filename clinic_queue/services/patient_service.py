from flask import current_app
from clinic_queue.extensions import db
from clinic_queue.models.booking_models import Booking
from clinic_queue.models.patient_models import Patient
from clinic_queue.services.errors import PatientNotFoundError, ValidationError
from clinic_queue.services.queue_service import serialize_booking
from clinic_queue.utils.time_util import isoformat_or_none, parse_date

REQUIRED_FIELDS = ('first_name', 'last_name', 'date_of_birth')
# Contact and history fields staff may edit after registration
EDITABLE_FIELDS = ('phone_number', 'email', 'address', 'medical_history')


def serialize_patient(patient, include_bookings=False):
    data = {
        'patient_id': patient.id,
        'first_name': patient.first_name,
        'last_name': patient.last_name,
        'date_of_birth': isoformat_or_none(patient.date_of_birth),
        'phone_number': patient.phone_number,
        'email': patient.email,
        'address': patient.address,
        'medical_history': patient.medical_history,
        'created_at': isoformat_or_none(patient.created_at),
        'updated_at': isoformat_or_none(patient.updated_at),
    }
    if include_bookings:
        bookings = patient.bookings.order_by(Booking.booking_date.asc()).all()
        data['bookings'] = [serialize_booking(b) for b in bookings]
    return data


def _get_patient_or_raise(patient_id):
    patient = db.session.get(Patient, patient_id)
    if patient is None:
        raise PatientNotFoundError(f"Patient {patient_id} not found")
    return patient


def register_patient(data):
    """Creates a patient record from registration data."""
    missing = [field for field in REQUIRED_FIELDS if not data.get(field)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    try:
        date_of_birth = parse_date(data['date_of_birth'])
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date_of_birth: {data['date_of_birth']}")

    patient = Patient(
        first_name=str(data['first_name']).strip(),
        last_name=str(data['last_name']).strip(),
        date_of_birth=date_of_birth,
        **{field: data.get(field) for field in EDITABLE_FIELDS}
    )
    db.session.add(patient)
    db.session.commit()
    current_app.logger.info(f"Registered patient {patient.id}")
    return serialize_patient(patient)


def get_patient(patient_id):
    return serialize_patient(_get_patient_or_raise(patient_id), include_bookings=True)


def update_patient(patient_id, data):
    """Updates contact and history fields; identity fields are left untouched."""
    patient = _get_patient_or_raise(patient_id)
    for field in EDITABLE_FIELDS:
        if field in data:
            setattr(patient, field, data[field])
    db.session.commit()
    return serialize_patient(patient)
