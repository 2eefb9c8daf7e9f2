"""
Unit Tests for Student and Health Endpoints
"""
import pytest
from httpx import AsyncClient


class TestResolveStudent:
    """Test GET /students/resolve"""

    @pytest.mark.asyncio
    async def test_resolve(self, client: AsyncClient):
        response = await client.get(
            '/api/v1/students/resolve',
            params={'email': '24bce167@nirmauni.ac.in', 'on': '2025-11-15'},
        )

        assert response.status_code == 200
        data = response.json()
        assert data['info'] == {
            'branch': 'Computer Science Engineering',
            'admission_year': 2024,
            'roll_no': '24bce167',
        }
        assert data['current_semester'] == 3
        assert data['eligible_semesters'] == [3, 4]
        assert data['academic_year'] == '2025-26'
        assert data['is_institute_account'] is True

    @pytest.mark.asyncio
    async def test_unknown_email(self, client: AsyncClient):
        response = await client.get('/api/v1/students/resolve', params={'email': 'someone@example.com'})

        assert response.status_code == 404
        assert response.json()['error']['code'] == 'STUDENT_NOT_FOUND'


class TestCurrentStudent:
    """Test GET /students/me"""

    @pytest.mark.asyncio
    async def test_me(self, client: AsyncClient, auth_headers, student_email):
        response = await client.get('/api/v1/students/me', headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data['email'] == student_email
        assert data['info']['admission_year'] == 2024

    @pytest.mark.asyncio
    async def test_admin_has_no_profile(self, client: AsyncClient, admin_auth_headers):
        response = await client.get('/api/v1/students/me', headers=admin_auth_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient):
        response = await client.get('/api/v1/students/me')
        assert response.status_code in (401, 403)

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient):
        response = await client.get('/api/v1/students/me', headers={'Authorization': 'Bearer not-a-jwt'})
        assert response.status_code == 401


class TestHealth:
    """Test health and root endpoints"""

    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient):
        response = await client.get('/api/v1/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'
        assert response.json()['service'] == 'stride-backend'

    @pytest.mark.asyncio
    async def test_readiness(self, client: AsyncClient):
        response = await client.get('/api/v1/health/ready')

        assert response.status_code == 200
        checks = response.json()['checks']
        assert checks['database']['status'] == 'healthy'
        assert checks['redis'] == {'status': 'skipped'}

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient):
        response = await client.get('/')

        assert response.status_code == 200
        assert response.json()['health'] == '/api/v1/health'
        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Request-ID']
