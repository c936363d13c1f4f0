"""Shared pytest fixtures."""

from datetime import date, datetime

import pytest

from clinic_queue import create_app
from clinic_queue.commands import seed_demo_data
from clinic_queue.extensions import db
from clinic_queue.models import Booking, Patient

FIXED_NOW = datetime(2026, 3, 2, 15, 0, 0)


@pytest.fixture
def app():
    """App bound to a fresh in-memory database."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded(app):
    """Demo patients and bookings covering every tab and patient status, anchored at FIXED_NOW."""
    patients, bookings = seed_demo_data(now=FIXED_NOW)
    return {'patients': patients, 'bookings': bookings}


@pytest.fixture
def patient(app):
    patient = Patient(
        first_name='Test',
        last_name='Fixture',
        date_of_birth=date(1990, 1, 1),
        phone_number='555-000-0000',
        email='test.fixture@example.com',
    )
    db.session.add(patient)
    db.session.commit()
    return patient


@pytest.fixture
def booking(patient):
    booking = Booking(
        patient_id=patient.id,
        doctor_name='Dr. Test Provider',
        booking_date=FIXED_NOW,
        notes='Fixture visit',
    )
    db.session.add(booking)
    db.session.commit()
    return booking


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def booking_with_status(seeded):
    """Looks up the first seeded booking with a given stored patient status."""
    def _find(patient_status):
        return next(b for b in seeded['bookings'] if b.patient_status == patient_status)
    return _find
