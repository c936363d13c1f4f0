# /clinic_queue/utils/status_util.py
"""
Queue and patient status vocabularies.

Two vocabularies coexist in stored rows: the current underscore statuses and
the hyphenated ones written by the first version of the dashboard
('pre-booked', 'checked-in', 'in-consultation', 'no-show'). Incoming values are
normalized here before they reach a query or an update.
"""
from enum import Enum
from clinic_queue.services.errors import InvalidStatusError


class QueueStatus(str, Enum):
    """Coarse visit phase, one per dashboard tab."""
    PRE_BOOKED = 'pre_booked'
    ACTIVE = 'active'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class PatientStatus(str, Enum):
    """Fine-grained phase within a visit."""
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    INTAKE = 'intake'
    READY_FOR_PROVIDER = 'ready_for_provider'
    PROVIDER = 'provider'
    READY_FOR_DISCHARGE = 'ready_for_discharge'
    DISCHARGED = 'discharged'
    NO_SHOW = 'no_show'
    CANCELLED = 'cancelled'
    # Legacy
    CHECKED_IN = 'checked_in'
    IN_CONSULTATION = 'in_consultation'
    COMPLETED = 'completed'


QUEUE_STATUSES = tuple(status.value for status in QueueStatus)
PATIENT_STATUSES = tuple(status.value for status in PatientStatus)

LEGACY_PATIENT_STATUS_MAP = {
    PatientStatus.CHECKED_IN.value: PatientStatus.INTAKE.value,
    PatientStatus.IN_CONSULTATION.value: PatientStatus.PROVIDER.value,
    PatientStatus.COMPLETED.value: PatientStatus.DISCHARGED.value,
}
LEGACY_PATIENT_STATUSES = tuple(LEGACY_PATIENT_STATUS_MAP)
CURRENT_PATIENT_STATUSES = tuple(s for s in PATIENT_STATUSES if s not in LEGACY_PATIENT_STATUS_MAP)

# Old queue statuses -> (queue status, patient status they imply)
LEGACY_QUEUE_STATUS_MAP = {
    'checked_in': (QueueStatus.ACTIVE.value, PatientStatus.CHECKED_IN.value),
    'in_consultation': (QueueStatus.ACTIVE.value, PatientStatus.IN_CONSULTATION.value),
    'no_show': (QueueStatus.COMPLETED.value, PatientStatus.NO_SHOW.value),
}

# Dashboard tab -> stored queue statuses shown under it
QUEUE_TABS = {
    'pre_booked': (QueueStatus.PRE_BOOKED.value,),
    'active': (QueueStatus.ACTIVE.value,),
    'in_office': (QueueStatus.ACTIVE.value,),
    'completed': (QueueStatus.COMPLETED.value, QueueStatus.CANCELLED.value),
    'cancelled': (QueueStatus.CANCELLED.value,),
}

WAITING_ROOM_STATUSES = (
    PatientStatus.INTAKE.value,
    PatientStatus.READY_FOR_PROVIDER.value,
    PatientStatus.CHECKED_IN.value,
)
IN_CALL_STATUSES = (
    PatientStatus.PROVIDER.value,
    PatientStatus.IN_CONSULTATION.value,
)

# Current status -> stored values counted under it (legacy aliases fold in)
PATIENT_STATUS_BUCKETS = {
    status: (status,) + tuple(legacy for legacy, current in LEGACY_PATIENT_STATUS_MAP.items() if current == status)
    for status in CURRENT_PATIENT_STATUSES
}

CHECK_IN_STATUSES = (PatientStatus.CHECKED_IN.value, PatientStatus.INTAKE.value)
CONSULTATION_START_STATUSES = (PatientStatus.PROVIDER.value, PatientStatus.IN_CONSULTATION.value)
CONSULTATION_END_STATUSES = (PatientStatus.DISCHARGED.value, PatientStatus.COMPLETED.value)

STATUS_LABELS = {
    'pre_booked': 'Pre-booked',
    'active': 'In Office',
    'in_office': 'In Office',
    'ready_for_provider': 'Ready for Provider',
    'ready_for_discharge': 'Ready for Discharge',
    'no_show': 'No Show',
    'checked_in': 'Checked In',
    'in_consultation': 'In Consultation',
}


def normalize_status(value):
    """Lower-cases a status and folds hyphens and spaces into underscores."""
    if value is None:
        return None
    normalized = str(value).strip().lower().replace('-', '_').replace(' ', '_')
    return normalized or None


def resolve_queue_status(value):
    """
    Resolves an incoming queue status to ``(queue_status, implied_patient_status)``.

    Current statuses imply no patient status. Legacy queue statuses such as
    'checked-in' map onto 'active' and imply the matching legacy patient status.
    """
    normalized = normalize_status(value)
    if normalized in QUEUE_STATUSES:
        return normalized, None
    if normalized in LEGACY_QUEUE_STATUS_MAP:
        return LEGACY_QUEUE_STATUS_MAP[normalized]
    raise InvalidStatusError(f"Invalid queue status: {value}")


def resolve_patient_status(value):
    normalized = normalize_status(value)
    if normalized is None:
        return None
    if normalized not in PATIENT_STATUSES:
        raise InvalidStatusError(f"Invalid patient status: {value}")
    return normalized


def queue_statuses_for_tab(tab):
    """Stored queue statuses listed under a dashboard tab ('completed' includes cancelled)."""
    normalized = normalize_status(tab)
    if normalized in QUEUE_TABS:
        return QUEUE_TABS[normalized]
    if normalized in LEGACY_QUEUE_STATUS_MAP:
        return QUEUE_TABS[LEGACY_QUEUE_STATUS_MAP[normalized][0]]
    raise InvalidStatusError(f"Invalid queue status: {tab}")


def current_patient_status(value):
    """Maps a legacy patient status onto the current vocabulary."""
    normalized = normalize_status(value)
    return LEGACY_PATIENT_STATUS_MAP.get(normalized, normalized)


def timestamp_field_for(queue_status, patient_status=None):
    """Name of the Booking timestamp column an update to these statuses stamps, or None."""
    if patient_status in CHECK_IN_STATUSES:
        return 'check_in_time'
    if patient_status in CONSULTATION_START_STATUSES:
        return 'consultation_start_time'
    if patient_status in CONSULTATION_END_STATUSES:
        return 'consultation_end_time'
    if queue_status == QueueStatus.COMPLETED.value:
        return 'consultation_end_time'
    return None


def status_label(value):
    normalized = normalize_status(value)
    if not normalized:
        return ''
    return STATUS_LABELS.get(normalized, normalized.replace('_', ' ').title())
