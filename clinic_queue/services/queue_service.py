"""
Data access for the telehealth patient queue.

Every read returns the joined patient + booking view used by the dashboard;
every write is a plain field assignment followed by a commit. There is no
transition validation and no locking: the last write to a booking wins.
"""
from flask import current_app
from sqlalchemy import or_
from sqlalchemy.orm import contains_eager

from clinic_queue.extensions import db
from clinic_queue.models.booking_models import Booking
from clinic_queue.models.patient_models import Patient
from clinic_queue.services.errors import BookingNotFoundError, PatientNotFoundError, ValidationError
from clinic_queue.utils.status_util import (
    QueueStatus, PatientStatus, PATIENT_STATUS_BUCKETS, WAITING_ROOM_STATUSES, IN_CALL_STATUSES,
    queue_statuses_for_tab, resolve_queue_status, resolve_patient_status, timestamp_field_for,
)
from clinic_queue.utils.time_util import (
    utcnow, isoformat_or_none, format_wait_time, parse_datetime,
)


def serialize_booking(booking, include_wait_time=False, now=None):
    """Maps a Booking and its Patient onto the flat queue view."""
    patient = booking.patient
    data = {
        'booking_id': booking.id,
        'patient_id': booking.patient_id,
        'first_name': patient.first_name,
        'last_name': patient.last_name,
        'date_of_birth': isoformat_or_none(patient.date_of_birth),
        'phone_number': patient.phone_number,
        'doctor_name': booking.doctor_name,
        'booking_date': isoformat_or_none(booking.booking_date),
        'queue_status': booking.queue_status,
        'patient_status': booking.patient_status,
        'check_in_time': isoformat_or_none(booking.check_in_time),
        'consultation_start_time': isoformat_or_none(booking.consultation_start_time),
        'consultation_end_time': isoformat_or_none(booking.consultation_end_time),
        'notes': booking.notes,
        'provider_notes': booking.provider_notes,
        'medical_history': patient.medical_history,
        'chief_complaint': booking.chief_complaint,
        'is_adhoc': bool(booking.is_adhoc),
        'appointment_type': booking.appointment_type,
    }
    if include_wait_time:
        data['wait_time'] = format_wait_time(booking.check_in_time, booking.consultation_start_time, now)
    return data


def _booking_query():
    return Booking.query.join(Booking.patient).options(contains_eager(Booking.patient))


def _patient_name_filter(patient_name):
    term = patient_name.strip()
    return or_(
        Patient.first_name.icontains(term, autoescape=True),
        Patient.last_name.icontains(term, autoescape=True),
        (Patient.first_name + ' ' + Patient.last_name).icontains(term, autoescape=True),
    )


def _doctor_name_filter(doctor_name):
    return Booking.doctor_name.icontains(doctor_name.strip(), autoescape=True)


def _get_booking_or_raise(booking_id):
    booking = db.session.get(Booking, booking_id)
    if booking is None:
        raise BookingNotFoundError(f"Booking {booking_id} not found")
    return booking


def get_booking(booking_id):
    booking = _booking_query().filter(Booking.id == booking_id).first()
    return serialize_booking(booking) if booking else None


def list_bookings():
    bookings = _booking_query().order_by(Booking.booking_date.asc()).all()
    return [serialize_booking(b) for b in bookings]


def get_bookings_by_queue_status(queue_status):
    """Bookings listed under a queue tab, earliest booking first."""
    statuses = queue_statuses_for_tab(queue_status)
    bookings = (
        _booking_query()
        .filter(Booking.queue_status.in_(statuses))
        .order_by(Booking.booking_date.asc())
        .all()
    )
    return [serialize_booking(b) for b in bookings]


def get_bookings_by_patient_status(patient_status):
    status = resolve_patient_status(patient_status)
    if status is None:
        raise ValidationError('Patient status parameter is required')
    bookings = (
        _booking_query()
        .filter(Booking.patient_status == status)
        .order_by(Booking.booking_date.asc())
        .all()
    )
    return [serialize_booking(b) for b in bookings]


def search_bookings(queue_status=None, patient_status=None, patient_name=None, doctor_name=None):
    """
    Filters bookings by any combination of queue status, patient status,
    patient name and doctor name.

    Names match case-insensitively by substring; a patient name matches the
    first name, the last name or "first last". Results are ordered by booking
    date, newest first.
    """
    query = _booking_query()

    if queue_status:
        query = query.filter(Booking.queue_status.in_(queue_statuses_for_tab(queue_status)))

    if patient_status:
        query = query.filter(Booking.patient_status == resolve_patient_status(patient_status))

    if patient_name and patient_name.strip():
        query = query.filter(_patient_name_filter(patient_name))

    if doctor_name and doctor_name.strip():
        query = query.filter(_doctor_name_filter(doctor_name))

    bookings = query.order_by(Booking.booking_date.desc()).all()
    return [serialize_booking(b) for b in bookings]


def update_booking_status(booking_id, queue_status, patient_status=None, notes=None, now=None):
    """
    Sets a booking's queue status (and optionally its patient status and
    provider notes), stamping the timestamp that goes with the new status.

    Any status may follow any other. Legacy queue statuses such as
    'checked-in' are accepted and imply the matching patient status when none
    is given.
    """
    booking = _get_booking_or_raise(booking_id)

    new_queue_status, implied_patient_status = resolve_queue_status(queue_status)
    new_patient_status = resolve_patient_status(patient_status) or implied_patient_status

    booking.queue_status = new_queue_status
    if new_patient_status:
        booking.patient_status = new_patient_status

    timestamp_field = timestamp_field_for(new_queue_status, new_patient_status)
    if timestamp_field:
        setattr(booking, timestamp_field, now or utcnow())

    if notes is not None:
        booking.provider_notes = notes

    db.session.commit()
    current_app.logger.info(
        f"Booking {booking_id} set to queue_status={new_queue_status}, patient_status={booking.patient_status}"
    )
    return serialize_booking(booking)


def update_provider_notes(booking_id, notes):
    booking = _get_booking_or_raise(booking_id)
    booking.provider_notes = notes
    db.session.commit()
    return serialize_booking(booking)


def get_queue_counts():
    """Counts per dashboard tab. Each count is its own query, so they may disagree under concurrent writes."""
    pre_booked = Booking.query.filter(Booking.queue_status == QueueStatus.PRE_BOOKED.value).count()
    in_office = Booking.query.filter(Booking.queue_status == QueueStatus.ACTIVE.value).count()
    completed = Booking.query.filter(
        Booking.queue_status.in_(queue_statuses_for_tab(QueueStatus.COMPLETED.value))
    ).count()

    return {
        'pre_booked': pre_booked,
        'in_office': in_office,
        'completed': completed,
    }


def get_patient_status_counts(queue_status=None):
    """Counts per current patient status, optionally within one queue tab. Legacy statuses count under their successor."""
    base_query = Booking.query
    if queue_status:
        base_query = base_query.filter(Booking.queue_status.in_(queue_statuses_for_tab(queue_status)))

    return {
        status: base_query.filter(Booking.patient_status.in_(stored_values)).count()
        for status, stored_values in PATIENT_STATUS_BUCKETS.items()
    }


def get_in_office_groups(patient_name=None, doctor_name=None, now=None):
    """
    Splits active bookings into the waiting room and the in-call group.

    Both groups are ordered longest-waiting first: the waiting room by
    check-in time, the in-call group by consultation start.
    """
    now = now or utcnow()
    base_query = _booking_query().filter(Booking.queue_status == QueueStatus.ACTIVE.value)

    if patient_name and patient_name.strip():
        base_query = base_query.filter(_patient_name_filter(patient_name))
    if doctor_name and doctor_name.strip():
        base_query = base_query.filter(_doctor_name_filter(doctor_name))

    waiting_room = (
        base_query
        .filter(Booking.patient_status.in_(WAITING_ROOM_STATUSES))
        .order_by(Booking.check_in_time.asc().nulls_last(), Booking.booking_date.asc())
        .all()
    )
    in_call = (
        base_query
        .filter(Booking.patient_status.in_(IN_CALL_STATUSES))
        .order_by(Booking.consultation_start_time.asc().nulls_last(), Booking.booking_date.asc())
        .all()
    )

    return {
        'waiting_room': [serialize_booking(b, include_wait_time=True, now=now) for b in waiting_room],
        'in_call': [serialize_booking(b, include_wait_time=True, now=now) for b in in_call],
    }


def create_booking(patient_id, doctor_name, booking_date=None, notes=None, chief_complaint=None,
                   is_adhoc=False, patient_status=None, now=None):
    """
    Books a visit for an existing patient.

    Scheduled visits start as pre-booked / pending. Ad-hoc walk-ins go straight
    into the office: active / intake, checked in now, booked for now unless a
    date is given.
    """
    if db.session.get(Patient, patient_id) is None:
        raise PatientNotFoundError(f"Patient {patient_id} not found")
    if not doctor_name or not str(doctor_name).strip():
        raise ValidationError('doctor_name is required')

    now = now or utcnow()
    if booking_date:
        try:
            booking_date = parse_datetime(booking_date)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid booking_date: {booking_date}")
    elif is_adhoc:
        booking_date = now
    else:
        raise ValidationError('booking_date is required for scheduled bookings')

    booking = Booking(
        patient_id=patient_id,
        doctor_name=str(doctor_name).strip(),
        booking_date=booking_date,
        notes=notes,
        chief_complaint=chief_complaint,
        is_adhoc=bool(is_adhoc),
    )

    if is_adhoc:
        booking.queue_status = QueueStatus.ACTIVE.value
        booking.patient_status = resolve_patient_status(patient_status) or PatientStatus.INTAKE.value
        booking.check_in_time = now
    else:
        booking.queue_status = QueueStatus.PRE_BOOKED.value
        booking.patient_status = resolve_patient_status(patient_status) or PatientStatus.PENDING.value

    db.session.add(booking)
    db.session.commit()
    current_app.logger.info(f"Created {booking.appointment_type} booking {booking.id} for patient {patient_id}")
    return serialize_booking(booking)
