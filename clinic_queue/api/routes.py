# /clinic_queue/api/routes.py

from flask import current_app
from . import api_bp
from clinic_queue.extensions import limiter
from clinic_queue.utils.decorators import audit_log
from .controllers import queue_controller, patient_controller


def _queue_rate_limit():
    return current_app.config['QUEUE_API_RATELIMIT']


# --- Queue Read Endpoints ---
@api_bp.route('/queue/booking/<string:booking_id>', methods=['GET'])
@limiter.limit(_queue_rate_limit)
@audit_log("VIEW_BOOKING_DETAIL", "bookings")
def get_booking_route(booking_id):
    return queue_controller.get_booking(booking_id)

@api_bp.route('/queue/counts', methods=['GET'])
@limiter.limit(_queue_rate_limit)
@audit_log("VIEW_QUEUE_COUNTS", "queue")
def get_queue_counts_route():
    return queue_controller.get_queue_counts()

@api_bp.route('/queue/patient-status-counts', methods=['GET'])
@limiter.limit(_queue_rate_limit)
@audit_log("VIEW_PATIENT_STATUS_COUNTS", "queue")
def get_patient_status_counts_route():
    return queue_controller.get_patient_status_counts()

@api_bp.route('/queue/search', methods=['GET'])
@limiter.limit(_queue_rate_limit)
@audit_log("SEARCH_BOOKINGS", "bookings")
def search_bookings_route():
    return queue_controller.search_bookings()

@api_bp.route('/queue/in-office-groups', methods=['GET'])
@limiter.limit(_queue_rate_limit)
@audit_log("VIEW_IN_OFFICE_GROUPS", "queue")
def get_in_office_groups_route():
    return queue_controller.get_in_office_groups()

@api_bp.route('/queue/patient-status', methods=['GET'])
@limiter.limit(_queue_rate_limit)
@audit_log("VIEW_BOOKINGS_BY_PATIENT_STATUS", "bookings")
def get_bookings_by_patient_status_route():
    return queue_controller.get_bookings_by_patient_status()

@api_bp.route('/queue/patients', methods=['GET'])
@limiter.limit(_queue_rate_limit)
@audit_log("VIEW_QUEUE_TAB", "bookings")
def get_patients_by_tab_route():
    return queue_controller.get_patients_by_tab()


# --- Queue Write Endpoints ---
@api_bp.route('/queue/booking/<string:booking_id>/status', methods=['PUT'])
@limiter.limit("60 per minute")
@audit_log("UPDATE_BOOKING_STATUS", "bookings")
def update_booking_status_route(booking_id):
    return queue_controller.update_booking_status(booking_id)

@api_bp.route('/queue/booking/<string:booking_id>/notes', methods=['PUT'])
@limiter.limit("60 per minute")
@audit_log("UPDATE_PROVIDER_NOTES", "bookings")
def update_provider_notes_route(booking_id):
    return queue_controller.update_provider_notes(booking_id)

@api_bp.route('/queue/bookings', methods=['POST'])
@limiter.limit("30 per minute")
@audit_log("CREATE_BOOKING", "bookings")
def create_booking_route():
    return queue_controller.create_booking()


# --- Patient Endpoints ---
@api_bp.route('/patients', methods=['POST'])
@limiter.limit("30 per minute")
@audit_log("REGISTER_PATIENT", "patients")
def register_patient_route():
    return patient_controller.register_patient()

@api_bp.route('/patients/<string:patient_id>', methods=['GET'])
@limiter.limit(_queue_rate_limit)
@audit_log("VIEW_PATIENT_DETAIL", "patients")
def get_patient_route(patient_id):
    return patient_controller.get_patient(patient_id)

@api_bp.route('/patients/<string:patient_id>', methods=['PUT'])
@limiter.limit("60 per minute")
@audit_log("UPDATE_PATIENT", "patients")
def update_patient_route(patient_id):
    return patient_controller.update_patient(patient_id)
