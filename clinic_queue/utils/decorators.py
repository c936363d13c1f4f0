from functools import wraps
from flask import request, current_app, make_response
from clinic_queue.models.system_models import AuditLog
from clinic_queue.extensions import db
from sqlalchemy.exc import SQLAlchemyError

RESOURCE_ID_KWARGS = ('booking_id', 'patient_id')

def _resource_id_from(kwargs):
    for key in RESOURCE_ID_KWARGS:
        if kwargs.get(key):
            return str(kwargs[key])
    return None

def audit_log(action, resource):
    """Records every queue and patient request in the audit trail."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            resource_id = _resource_id_from(kwargs)
            ip_address = request.remote_addr
            user_agent = request.headers.get('User-Agent')

            try:
                # Use make_response to handle both Response objects and tuples.
                raw_response = f(*args, **kwargs)
                response = make_response(raw_response)

                success = response.status_code < 400
                details = f"Request successful. Status: {response.status_code}" if success \
                    else f"Request rejected. Status: {response.status_code}"

                # A newly created record is identified by the response body
                if resource_id is None and success and response.is_json:
                    data = (response.get_json(silent=True) or {}).get('data') or {}
                    if isinstance(data, dict):
                        resource_id = data.get('booking_id') or data.get('patient_id')

                log_entry = AuditLog(
                    action=action,
                    resource=resource,
                    resource_id=resource_id,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    success=success,
                    details=details
                )
                db.session.add(log_entry)
                db.session.commit()
                current_app.audit_logger.info(
                    f"Action='{action}', Resource='{resource}', ResourceID='{resource_id}', Success='{success}', Details='{details}'"
                )

                return response

            except Exception as e:
                details = f"An error occurred: {str(e)}"
                try:
                    db.session.rollback()
                    db.session.add(AuditLog(
                        action=action,
                        resource=resource,
                        resource_id=resource_id,
                        ip_address=ip_address,
                        user_agent=user_agent,
                        success=False,
                        details=details
                    ))
                    db.session.commit()
                except SQLAlchemyError as db_error:
                    current_app.audit_logger.error(f"Failed to log audit entry due to DB error: {db_error}")
                    db.session.rollback()

                current_app.audit_logger.error(
                    f"Action='{action}', Resource='{resource}', ResourceID='{resource_id}', Success='False', Details='{details}'"
                )

                raise

        return decorated_function
    return decorator
