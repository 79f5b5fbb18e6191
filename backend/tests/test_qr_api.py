"""QR code endpoints."""
import json


def issue(client):
    response = client.get('/api/qrcode')
    assert response.status_code == 200
    return json.loads(response.data)['data']['token']


def test_issue_requires_session(client):
    assert client.get('/api/qrcode').status_code == 401


def test_lecturer_verifies_student_token(student_client, lecturer_client, student):
    token = issue(student_client)

    response = lecturer_client.post('/api/qrcode/verify', json={'token': token})
    assert response.status_code == 200

    data = json.loads(response.data)['data']
    assert data['id'] == student.id
    assert data['student_id'] == 'ST12345'
    assert 'password_hash' not in data


def test_token_can_be_scanned_twice(student_client, lecturer_client):
    token = issue(student_client)

    assert lecturer_client.post('/api/qrcode/verify', json={'token': token}).status_code == 200
    assert lecturer_client.post('/api/qrcode/verify', json={'token': token}).status_code == 200


def test_student_cannot_verify(student_client):
    token = issue(student_client)
    response = student_client.post('/api/qrcode/verify', json={'token': token})
    assert response.status_code == 403


def test_verify_unknown_token(lecturer_client):
    response = lecturer_client.post('/api/qrcode/verify', json={'token': 'deadbeef'})

    assert response.status_code == 400
    assert json.loads(response.data)['message'] == 'Invalid or expired token'


def test_verify_expired_token(clock, student_client, lecturer_client):
    token = issue(student_client)
    clock.advance(minutes=5)

    response = lecturer_client.post('/api/qrcode/verify', json={'token': token})
    assert response.status_code == 400


def test_verify_requires_token(lecturer_client):
    response = lecturer_client.post('/api/qrcode/verify', json={})
    assert response.status_code == 400
    assert json.loads(response.data)['details'][0]['field'] == 'token'


def test_image_endpoint(student_client):
    response = student_client.get('/api/qrcode/image')
    data = json.loads(response.data)['data']

    assert data['qr_image'].startswith('data:image/png;base64,')
    assert data['expires_in'] == 300
    assert len(data['token']) == 32
