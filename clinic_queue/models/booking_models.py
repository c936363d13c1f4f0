import uuid
from clinic_queue.extensions import db
from clinic_queue.utils.status_util import QueueStatus, PatientStatus
from clinic_queue.utils.time_util import utcnow

class Booking(db.Model):
    """One scheduled or walk-in telehealth visit for a patient.

    Two status fields coexist: ``queue_status`` is the coarse phase used for the
    dashboard tabs, ``patient_status`` is the finer phase inside a visit. Rows
    written by the older dashboard may still carry the legacy patient statuses
    (checked_in, in_consultation, completed), so both columns are plain strings
    rather than database enums.
    """
    __tablename__ = 'bookings'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    patient_id = db.Column(db.String(36), db.ForeignKey('patients.id'), nullable=False, index=True)

    # Visit details
    doctor_name = db.Column(db.String(255), nullable=False) # free text, e.g. 'Dr. James Wilson'
    booking_date = db.Column(db.DateTime, nullable=False, index=True)
    queue_status = db.Column(db.String(32), nullable=False, default=QueueStatus.PRE_BOOKED.value, index=True)
    patient_status = db.Column(db.String(32), nullable=False, default=PatientStatus.PENDING.value, index=True)
    notes = db.Column(db.Text)
    provider_notes = db.Column(db.Text)
    chief_complaint = db.Column(db.Text)
    is_adhoc = db.Column(db.Boolean, nullable=False, default=False)

    # Populated as the visit progresses
    check_in_time = db.Column(db.DateTime)
    consultation_start_time = db.Column(db.DateTime)
    consultation_end_time = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    patient = db.relationship('Patient', back_populates='bookings')

    @property
    def appointment_type(self):
        return 'adhoc' if self.is_adhoc else 'booked'

    def __repr__(self):
        return f'<Booking {self.id} {self.queue_status}/{self.patient_status}>'
