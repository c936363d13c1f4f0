"""Endpoint tests for the /api/queue blueprint."""

from sqlalchemy.exc import SQLAlchemyError

from clinic_queue.models import AuditLog, Booking
from clinic_queue.services import queue_service


class TestBookingDetail:

    def test_get_booking(self, client, booking):
        response = client.get(f'/api/queue/booking/{booking.id}')
        assert response.status_code == 200
        body = response.get_json()
        assert body['success'] is True
        assert body['data']['booking_id'] == booking.id
        assert body['data']['doctor_name'] == 'Dr. Test Provider'

    def test_unknown_booking(self, client):
        response = client.get('/api/queue/booking/nope')
        assert response.status_code == 404
        assert response.get_json() == {'success': False, 'error': 'Booking not found'}


class TestStatusUpdate:

    def test_provider_sets_consultation_start_time(self, client, booking):
        response = client.put(
            f'/api/queue/booking/{booking.id}/status',
            json={'queueStatus': 'active', 'patientStatus': 'provider'},
        )
        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['patient_status'] == 'provider'
        assert data['consultation_start_time'] is not None
        assert data['check_in_time'] is None

    def test_snake_case_body_and_notes(self, client, booking):
        response = client.put(
            f'/api/queue/booking/{booking.id}/status',
            json={'queue_status': 'completed', 'patient_status': 'discharged', 'notes': 'Stable'},
        )
        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['queue_status'] == 'completed'
        assert data['provider_notes'] == 'Stable'
        assert data['consultation_end_time'] is not None

    def test_queue_status_is_required(self, client, booking):
        response = client.put(f'/api/queue/booking/{booking.id}/status', json={'patientStatus': 'intake'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Queue status is required'

    def test_body_must_be_json(self, client, booking):
        response = client.put(f'/api/queue/booking/{booking.id}/status', data='active')
        assert response.status_code == 400

    def test_invalid_status(self, client, booking):
        response = client.put(
            f'/api/queue/booking/{booking.id}/status',
            json={'queueStatus': 'active', 'patientStatus': 'lost'},
        )
        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_unknown_booking(self, client):
        response = client.put('/api/queue/booking/missing/status', json={'queueStatus': 'active'})
        assert response.status_code == 404

    def test_provider_notes(self, client, booking):
        response = client.put(f'/api/queue/booking/{booking.id}/notes', json={'notes': 'Prescribed rest'})
        assert response.status_code == 200
        assert response.get_json()['data']['provider_notes'] == 'Prescribed rest'

    def test_provider_notes_required(self, client, booking):
        response = client.put(f'/api/queue/booking/{booking.id}/notes', json={})
        assert response.status_code == 400


class TestCountsEndpoints:

    def test_queue_counts(self, client, seeded):
        response = client.get('/api/queue/counts')
        assert response.status_code == 200
        assert response.get_json()['data'] == {'pre_booked': 4, 'in_office': 7, 'completed': 5}

    def test_patient_status_counts_for_tab(self, client, seeded):
        response = client.get('/api/queue/patient-status-counts?queueStatus=pre_booked')
        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['pending'] == 2
        assert data['confirmed'] == 2
        assert data['intake'] == 0

    def test_patient_status_counts_unknown_tab(self, client, seeded):
        response = client.get('/api/queue/patient-status-counts?queueStatus=archive')
        assert response.status_code == 400


class TestSearchEndpoints:

    def test_search_completed(self, client, seeded):
        response = client.get('/api/queue/search?queueStatus=completed')
        assert response.status_code == 200
        rows = response.get_json()['data']
        assert len(rows) == 5
        assert {r['queue_status'] for r in rows} <= {'completed', 'cancelled'}

    def test_search_by_names(self, client, seeded):
        response = client.get('/api/queue/search?patientName=davis&doctorName=wong')
        rows = response.get_json()['data']
        assert len(rows) == 1
        assert rows[0]['is_adhoc'] is True
        assert rows[0]['appointment_type'] == 'adhoc'

    def test_blank_filters_are_ignored(self, client, seeded):
        response = client.get('/api/queue/search?patientName=&doctorName=')
        assert len(response.get_json()['data']) == 16

    def test_in_office_groups(self, client, seeded):
        response = client.get('/api/queue/in-office-groups')
        assert response.status_code == 200
        body = response.get_json()
        assert body['counts'] == {'waiting_room': 4, 'in_call': 2}
        assert all('wait_time' in row for row in body['data']['waiting_room'])

    def test_bookings_by_patient_status(self, client, seeded):
        response = client.get('/api/queue/patient-status?status=no-show')
        assert response.status_code == 200
        rows = response.get_json()['data']
        assert [r['first_name'] for r in rows] == ['Emily']

    def test_bookings_by_patient_status_requires_status(self, client, seeded):
        response = client.get('/api/queue/patient-status')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Patient status parameter is required'

    def test_patients_by_tab(self, client, seeded):
        response = client.get('/api/queue/patients?status=in-office')
        assert response.status_code == 200
        assert len(response.get_json()['data']) == 7

    def test_patients_by_tab_rejects_other_values(self, client, seeded):
        assert client.get('/api/queue/patients').status_code == 400
        response = client.get('/api/queue/patients?status=cancelled')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid status parameter'


class TestCreateBooking:

    def test_create_adhoc_booking(self, client, patient):
        response = client.post('/api/queue/bookings', json={
            'patientId': patient.id,
            'doctorName': 'Dr. Lisa Wong',
            'isAdhoc': True,
            'chiefComplaint': 'Sore throat',
        })
        assert response.status_code == 201
        data = response.get_json()['data']
        assert data['queue_status'] == 'active'
        assert data['patient_status'] == 'intake'
        assert data['chief_complaint'] == 'Sore throat'

    def test_create_scheduled_booking(self, client, patient):
        response = client.post('/api/queue/bookings', json={
            'patient_id': patient.id,
            'doctor_name': 'Dr. Lisa Wong',
            'booking_date': '2026-04-01T09:30:00Z',
        })
        assert response.status_code == 201
        assert response.get_json()['data']['booking_date'] == '2026-04-01T09:30:00'

    def test_string_adhoc_flag_is_rejected(self, client, patient):
        response = client.post('/api/queue/bookings', json={
            'patientId': patient.id,
            'doctorName': 'Dr. Lisa Wong',
            'bookingDate': '2026-04-01T09:30:00Z',
            'isAdhoc': 'false',
        })
        assert response.status_code == 400
        assert response.get_json()['error'] == 'is_adhoc must be true or false'
        assert Booking.query.count() == 0

    def test_patient_id_required(self, client):
        response = client.post('/api/queue/bookings', json={'doctorName': 'Dr. Lisa Wong'})
        assert response.status_code == 400

    def test_unknown_patient(self, client):
        response = client.post('/api/queue/bookings', json={
            'patientId': 'missing', 'doctorName': 'Dr. Lisa Wong', 'isAdhoc': True,
        })
        assert response.status_code == 404


class TestErrorsAndAudit:

    def test_database_errors_are_opaque(self, client, monkeypatch):
        def broken():
            raise SQLAlchemyError('connection reset by peer')

        monkeypatch.setattr(queue_service, 'get_queue_counts', broken)
        response = client.get('/api/queue/counts')
        assert response.status_code == 500
        assert response.get_json() == {'success': False, 'error': 'Internal server error'}

    def test_unknown_route(self, client):
        response = client.get('/api/queue/nothing-here')
        assert response.status_code == 404
        assert response.get_json()['success'] is False

    def test_method_not_allowed(self, client, booking):
        response = client.post(f'/api/queue/booking/{booking.id}')
        assert response.status_code == 405

    def test_requests_are_audited(self, client, booking):
        client.put(f'/api/queue/booking/{booking.id}/status', json={'queueStatus': 'active'})
        entry = AuditLog.query.filter_by(action='UPDATE_BOOKING_STATUS').one()
        assert entry.resource == 'bookings'
        assert entry.resource_id == booking.id
        assert entry.success is True

    def test_failed_requests_are_audited(self, client):
        client.get('/api/queue/booking/missing')
        entry = AuditLog.query.filter_by(action='VIEW_BOOKING_DETAIL').one()
        assert entry.success is False
        assert entry.resource_id == 'missing'

    def test_created_resources_are_audited_by_id(self, client, patient):
        response = client.post('/api/queue/bookings', json={
            'patientId': patient.id, 'doctorName': 'Dr. Lisa Wong', 'isAdhoc': True,
        })
        entry = AuditLog.query.filter_by(action='CREATE_BOOKING').one()
        assert entry.resource_id == response.get_json()['data']['booking_id']

    def test_health(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.get_json()['data'] == {'status': 'ok'}
