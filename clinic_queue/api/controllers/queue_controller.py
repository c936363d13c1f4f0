from flask import request, jsonify
from clinic_queue.services import queue_service
from clinic_queue.utils.status_util import normalize_status

# Tabs accepted by the legacy /queue/patients listing
PATIENT_LIST_TABS = ('pre_booked', 'in_office', 'completed')


def _query_param(*names):
    """First non-empty query parameter among camelCase/snake_case spellings."""
    for name in names:
        value = request.args.get(name)
        if value and value.strip():
            return value.strip()
    return None


def _body_value(data, *names, default=None):
    for name in names:
        if name in data:
            return data[name]
    return default


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def get_booking(booking_id):
    """Gets the joined patient and booking view for one booking."""
    booking = queue_service.get_booking(booking_id)
    if not booking:
        return jsonify({"success": False, "error": "Booking not found"}), 404
    return jsonify({"success": True, "data": booking}), 200


def update_booking_status(booking_id):
    """Sets queue status and optionally patient status and provider notes."""
    data = _json_body()
    if data is None:
        return jsonify({"success": False, "error": "Request body must be a JSON object"}), 400

    queue_status = _body_value(data, 'queueStatus', 'queue_status')
    if not queue_status:
        return jsonify({"success": False, "error": "Queue status is required"}), 400

    booking = queue_service.update_booking_status(
        booking_id,
        queue_status,
        patient_status=_body_value(data, 'patientStatus', 'patient_status'),
        notes=_body_value(data, 'notes', 'providerNotes', 'provider_notes'),
    )
    return jsonify({"success": True, "data": booking}), 200


def update_provider_notes(booking_id):
    data = _json_body()
    notes = _body_value(data, 'notes', 'providerNotes', 'provider_notes') if data is not None else None
    if notes is None:
        return jsonify({"success": False, "error": "Notes are required"}), 400

    booking = queue_service.update_provider_notes(booking_id, notes)
    return jsonify({"success": True, "data": booking}), 200


def get_queue_counts():
    return jsonify({"success": True, "data": queue_service.get_queue_counts()}), 200


def get_patient_status_counts():
    queue_status = _query_param('queueStatus', 'queue_status')
    counts = queue_service.get_patient_status_counts(queue_status)
    return jsonify({"success": True, "data": counts}), 200


def search_bookings():
    bookings = queue_service.search_bookings(
        queue_status=_query_param('queueStatus', 'queue_status'),
        patient_status=_query_param('patientStatus', 'patient_status'),
        patient_name=_query_param('patientName', 'patient_name'),
        doctor_name=_query_param('doctorName', 'doctor_name'),
    )
    return jsonify({"success": True, "data": bookings}), 200


def get_in_office_groups():
    groups = queue_service.get_in_office_groups(
        patient_name=_query_param('patientName', 'patient_name'),
        doctor_name=_query_param('doctorName', 'doctor_name'),
    )
    return jsonify({
        "success": True,
        "data": groups,
        "counts": {
            "waiting_room": len(groups['waiting_room']),
            "in_call": len(groups['in_call']),
        }
    }), 200


def get_bookings_by_patient_status():
    status = _query_param('status', 'patientStatus', 'patient_status')
    if not status:
        return jsonify({"success": False, "error": "Patient status parameter is required"}), 400
    bookings = queue_service.get_bookings_by_patient_status(status)
    return jsonify({"success": True, "data": bookings}), 200


def get_patients_by_tab():
    """Lists bookings for one dashboard tab: pre-booked, in-office or completed."""
    status = _query_param('status')
    if not status:
        return jsonify({"success": False, "error": "Status parameter is required"}), 400
    if normalize_status(status) not in PATIENT_LIST_TABS:
        return jsonify({"success": False, "error": "Invalid status parameter"}), 400

    bookings = queue_service.get_bookings_by_queue_status(status)
    return jsonify({"success": True, "data": bookings}), 200


def create_booking():
    """Creates a scheduled booking or an ad-hoc walk-in."""
    data = _json_body()
    if data is None:
        return jsonify({"success": False, "error": "Request body must be a JSON object"}), 400

    patient_id = _body_value(data, 'patientId', 'patient_id')
    if not patient_id:
        return jsonify({"success": False, "error": "patient_id is required"}), 400

    is_adhoc = _body_value(data, 'isAdhoc', 'is_adhoc', default=False)
    if not isinstance(is_adhoc, bool):
        return jsonify({"success": False, "error": "is_adhoc must be true or false"}), 400

    booking = queue_service.create_booking(
        patient_id,
        _body_value(data, 'doctorName', 'doctor_name'),
        booking_date=_body_value(data, 'bookingDate', 'booking_date'),
        notes=_body_value(data, 'notes'),
        chief_complaint=_body_value(data, 'chiefComplaint', 'chief_complaint'),
        is_adhoc=is_adhoc,
        patient_status=_body_value(data, 'patientStatus', 'patient_status'),
    )
    return jsonify({"success": True, "data": booking}), 201
