from flask import request, jsonify
from clinic_queue.services import patient_service

# camelCase request keys -> model fields
FIELD_ALIASES = {
    'firstName': 'first_name',
    'lastName': 'last_name',
    'dateOfBirth': 'date_of_birth',
    'phoneNumber': 'phone_number',
    'medicalHistory': 'medical_history',
}


def _patient_payload():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return {FIELD_ALIASES.get(key, key): value for key, value in data.items()}


def register_patient():
    """Registers a new patient."""
    data = _patient_payload()
    if data is None:
        return jsonify({"success": False, "error": "Request body must be a JSON object"}), 400

    patient = patient_service.register_patient(data)
    return jsonify({"success": True, "data": patient}), 201


def get_patient(patient_id):
    """Gets a patient with all of their bookings."""
    return jsonify({"success": True, "data": patient_service.get_patient(patient_id)}), 200


def update_patient(patient_id):
    """Updates a patient's contact details or medical history."""
    data = _patient_payload()
    if data is None:
        return jsonify({"success": False, "error": "Request body must be a JSON object"}), 400

    patient = patient_service.update_patient(patient_id, data)
    return jsonify({"success": True, "data": patient}), 200
