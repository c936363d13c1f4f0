import click
from datetime import date, timedelta
from flask.cli import with_appcontext
from clinic_queue.extensions import db
from clinic_queue.models.patient_models import Patient
from clinic_queue.models.booking_models import Booking
from clinic_queue.utils.time_util import utcnow

DEMO_PATIENTS = [
    {'first_name': 'John', 'last_name': 'Smith', 'date_of_birth': date(1980, 5, 15),
     'phone_number': '555-123-4567', 'email': 'john.smith@example.com',
     'address': '123 Main St, Anytown, CA 12345', 'medical_history': 'Hypertension, Diabetes Type 2'},
    {'first_name': 'Emily', 'last_name': 'Johnson', 'date_of_birth': date(1992, 9, 23),
     'phone_number': '555-987-6543', 'email': 'emily.johnson@example.com',
     'address': '456 Oak Ave, Somewhere, CA 67890', 'medical_history': 'Asthma'},
    {'first_name': 'Michael', 'last_name': 'Williams', 'date_of_birth': date(1975, 11, 30),
     'phone_number': '555-456-7890', 'email': 'michael.williams@example.com',
     'address': '789 Elm St, Nowhere, CA 54321', 'medical_history': 'High cholesterol'},
    {'first_name': 'Sarah', 'last_name': 'Davis', 'date_of_birth': date(1988, 2, 12),
     'phone_number': '555-789-1234', 'email': 'sarah.davis@example.com',
     'address': '321 Pine Rd, Elsewhere, CA 13579', 'medical_history': 'Migraines'},
    {'first_name': 'David', 'last_name': 'Brown', 'date_of_birth': date(1965, 7, 8),
     'phone_number': '555-321-6547', 'email': 'david.brown@example.com',
     'address': '654 Cedar Ln, Anyplace, CA 24680', 'medical_history': 'Arthritis'},
]

# (patient index, doctor, booking offset, queue status, patient status, notes, chief complaint,
#  check-in offset, consultation start offset, consultation end offset, ad-hoc, provider notes)
# Offsets are minutes relative to now; None leaves the field empty.
DAY = 24 * 60
DEMO_BOOKINGS = [
    # Pre-booked
    (0, 'Dr. James Wilson', 2 * DAY, 'pre_booked', 'pending', 'Regular checkup', 'Annual physical exam',
     None, None, None, False, None),
    (2, 'Dr. Robert Lee', 4 * DAY, 'pre_booked', 'pending', 'Initial consultation', 'Persistent cough for 2 weeks',
     None, None, None, False, None),
    (1, 'Dr. Maria Garcia', 3 * DAY, 'pre_booked', 'confirmed', 'Follow-up appointment', 'Asthma management review',
     None, None, None, False, None),
    (4, 'Dr. David Johnson', 5 * DAY, 'pre_booked', 'confirmed', 'Follow-up on arthritis treatment',
     'Evaluate effectiveness of new medication', None, None, None, False, None),
    # In office
    (0, 'Dr. Elizabeth Taylor', 0, 'active', 'intake', 'Blood pressure check', 'Headaches and dizziness',
     -15, None, None, False, None),
    (3, 'Dr. Lisa Wong', 0, 'active', 'intake', 'New patient intake', 'Migraine symptoms worsening',
     -10, None, None, True, None),
    (2, 'Dr. Robert Lee', 0, 'active', 'ready_for_provider', 'Follow-up on cholesterol medication',
     'Side effects from medication', -45, None, None, False, None),
    (3, 'Dr. Kevin Chen', 0, 'active', 'provider', 'Medication review', 'Allergic reaction to new prescription',
     -30, -10, None, False, None),
    (1, 'Dr. Maria Garcia', -120, 'active', 'ready_for_discharge', 'Asthma flare up', 'Shortness of breath',
     -115, -90, -15, True, 'Administered nebulizer treatment. Prescription sent to pharmacy.'),
    (4, 'Dr. Kevin Chen', 0, 'active', 'checked_in', 'Back pain follow-up', 'Persistent lower back pain',
     -25, None, None, False, None),
    (0, 'Dr. Elizabeth Taylor', 0, 'active', 'in_consultation', 'Hypertension follow-up', 'Blood pressure review',
     -40, -20, None, False, None),
    # Completed and cancelled
    (0, 'Dr. James Wilson', -7 * DAY, 'completed', 'discharged', 'Annual physical', 'Routine checkup',
     -7 * DAY + 10, -7 * DAY + 15, -7 * DAY + 45, False,
     'Patient is doing well. Blood pressure is normal. Recommended continued exercise and diet.'),
    (2, 'Dr. Robert Lee', -3 * DAY, 'completed', 'discharged', 'Follow-up on cholesterol levels', 'Review of lab results',
     -3 * DAY + 5, -3 * DAY + 10, -3 * DAY + 25, False,
     'Cholesterol levels have improved. Continue with current medication and schedule follow-up in 3 months.'),
    (1, 'Dr. Maria Garcia', -5 * DAY, 'completed', 'no_show', 'Asthma check', 'Routine asthma management',
     None, None, None, False, 'Patient did not attend appointment. Attempted to call but no answer.'),
    (4, 'Dr. Lisa Wong', -2 * DAY, 'cancelled', 'cancelled', 'Joint pain assessment', 'Worsening arthritis pain in hands',
     None, None, None, False, 'Patient called to reschedule due to transportation issues.'),
    (3, 'Dr. David Johnson', -1 * DAY, 'completed', 'completed', 'Migraine treatment review',
     'Evaluation of new medication effectiveness', -1 * DAY + 10, -1 * DAY + 15, -1 * DAY + 35, False,
     'Medication appears to be helping. Continue current regimen and follow up in one month.'),
]


def _offset(now, minutes):
    return None if minutes is None else now + timedelta(minutes=minutes)


def seed_demo_data(now=None):
    """Adds the demo patients and one booking per dashboard state. Returns (patients, bookings)."""
    now = now or utcnow()
    patients = [Patient(**data) for data in DEMO_PATIENTS]
    db.session.add_all(patients)
    db.session.flush()

    bookings = []
    for (patient_index, doctor, booked_at, queue_status, patient_status, notes, complaint,
         checked_in, started, ended, is_adhoc, provider_notes) in DEMO_BOOKINGS:
        bookings.append(Booking(
            patient_id=patients[patient_index].id,
            doctor_name=doctor,
            booking_date=_offset(now, booked_at),
            queue_status=queue_status,
            patient_status=patient_status,
            notes=notes,
            chief_complaint=complaint,
            check_in_time=_offset(now, checked_in),
            consultation_start_time=_offset(now, started),
            consultation_end_time=_offset(now, ended),
            is_adhoc=is_adhoc,
            provider_notes=provider_notes,
        ))
    db.session.add_all(bookings)
    db.session.commit()
    return patients, bookings


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create the patients, bookings and audit tables."""
    db.create_all()
    click.echo("Database initialized successfully!")


@click.command('seed-db')
@click.option('--reset', is_flag=True, help='Delete existing patients and bookings first.')
@with_appcontext
def seed_db_command(reset):
    """Seed demo patients and bookings across every queue tab and patient status."""
    db.create_all()

    if reset:
        Booking.query.delete()
        Patient.query.delete()
        db.session.commit()
        click.echo("Existing patients and bookings removed.")
    elif Booking.query.first() is not None:
        click.echo("Bookings already exist, skipping seed. Use --reset to reseed.")
        return

    patients, bookings = seed_demo_data()
    click.echo(f"Created {len(patients)} patients")
    click.echo(f"Created {len(bookings)} bookings")

def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_db_command)
