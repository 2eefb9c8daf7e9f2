"""
Unit Tests for Resource and Contribution API Endpoints
Tests for: notes / PYQ listing, admin publishing, moderation flow
"""
import pytest
from httpx import AsyncClient
from faker import Faker

fake = Faker()


def resource_payload(subject_id: str, **overrides) -> dict:
    payload = {
        'title': fake.sentence(nb_words=3),
        'type': 'PYQ',
        'url': 'https://example.com/' + fake.slug(),
        'subject_id': subject_id,
    }
    payload.update(overrides)
    return payload


class TestResources:
    """Test /resources endpoints"""

    @pytest.mark.asyncio
    async def test_publish_and_filter(self, client: AsyncClient, cse_semester, admin_auth_headers):
        dbms, os_subject = cse_semester.subjects[0], cse_semester.subjects[1]
        for payload in (
            resource_payload(dbms.id, type='NOTES', title='ER diagrams'),
            resource_payload(dbms.id, title='DBMS 2024'),
            resource_payload(os_subject.id, title='OS 2023'),
        ):
            response = await client.post('/api/v1/resources', json=payload, headers=admin_auth_headers)
            assert response.status_code == 201

        response = await client.get('/api/v1/resources', params={'subject_id': dbms.id, 'type': 'PYQ'})

        assert response.status_code == 200
        data = response.json()
        assert [r['title'] for r in data] == ['DBMS 2024']
        assert data[0]['author'] == 'Admin'
        assert data[0]['subject_code'] == '2CS401'
        assert data[0]['semester'] == 4

        response = await client.get('/api/v1/resources', params={'type': 'NOTES'})
        assert [r['title'] for r in response.json()] == ['ER diagrams']

    @pytest.mark.asyncio
    async def test_unknown_type_rejected(self, client: AsyncClient):
        response = await client.get('/api/v1/resources', params={'type': 'SLIDES'})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_non_http_url_rejected(self, client: AsyncClient, cse_semester, admin_auth_headers):
        response = await client.post(
            '/api/v1/resources',
            json=resource_payload(cse_semester.subjects[0].id, url='javascript:alert(1)'),
            headers=admin_auth_headers,
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_publish_requires_admin(self, client: AsyncClient, cse_semester, auth_headers):
        response = await client.post(
            '/api/v1/resources',
            json=resource_payload(cse_semester.subjects[0].id),
            headers=auth_headers,
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_subject(self, client: AsyncClient, admin_auth_headers):
        response = await client.post(
            '/api/v1/resources',
            json=resource_payload('missing'),
            headers=admin_auth_headers,
        )
        assert response.status_code == 404
        assert response.json()['error']['code'] == 'SUBJECT_NOT_FOUND'

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, cse_semester, admin_auth_headers):
        created = await client.post(
            '/api/v1/resources',
            json=resource_payload(cse_semester.subjects[0].id),
            headers=admin_auth_headers,
        )
        resource_id = created.json()['id']

        response = await client.delete(f'/api/v1/resources/{resource_id}', headers=admin_auth_headers)
        assert response.status_code == 204

        response = await client.delete(f'/api/v1/resources/{resource_id}', headers=admin_auth_headers)
        assert response.status_code == 404
        assert response.json()['error']['code'] == 'RESOURCE_NOT_FOUND'


class TestContributions:
    """Test /contributions moderation flow"""

    @pytest.mark.asyncio
    async def test_submit_requires_sign_in(self, client: AsyncClient, cse_semester):
        response = await client.post(
            '/api/v1/contributions',
            json=resource_payload(cse_semester.subjects[0].id),
        )
        assert response.status_code in (401, 403)

    @pytest.mark.asyncio
    async def test_approve_flow(
        self, client: AsyncClient, cse_semester, auth_headers, admin_auth_headers, student_email
    ):
        response = await client.post(
            '/api/v1/contributions',
            json=resource_payload(cse_semester.subjects[1].id, type='NOTES', title='Deadlock notes'),
            headers=auth_headers,
        )
        assert response.status_code == 201
        contribution = response.json()
        assert contribution['status'] == 'PENDING'
        assert contribution['submitted_by'] == student_email

        # Not visible until approved
        assert (await client.get('/api/v1/resources')).json() == []

        response = await client.get('/api/v1/contributions', headers=admin_auth_headers)
        assert [c['id'] for c in response.json()] == [contribution['id']]

        response = await client.patch(
            f"/api/v1/contributions/{contribution['id']}",
            json={'action': 'APPROVE'},
            headers=admin_auth_headers,
        )
        assert response.status_code == 200
        review = response.json()
        assert review['status'] == 'APPROVED'
        assert review['resource']['title'] == 'Deadlock notes'
        assert review['resource']['author'] == student_email

        listed = (await client.get('/api/v1/resources', params={'type': 'NOTES'})).json()
        assert [r['title'] for r in listed] == ['Deadlock notes']
        assert (await client.get('/api/v1/contributions', headers=admin_auth_headers)).json() == []

    @pytest.mark.asyncio
    async def test_reject_flow(self, client: AsyncClient, cse_semester, auth_headers, admin_auth_headers):
        created = await client.post(
            '/api/v1/contributions',
            json=resource_payload(cse_semester.subjects[0].id),
            headers=auth_headers,
        )
        contribution_id = created.json()['id']

        response = await client.patch(
            f'/api/v1/contributions/{contribution_id}',
            json={'action': 'REJECT'},
            headers=admin_auth_headers,
        )
        assert response.status_code == 200
        assert response.json() == {'id': contribution_id, 'status': 'REJECTED', 'resource': None}

        response = await client.patch(
            f'/api/v1/contributions/{contribution_id}',
            json={'action': 'APPROVE'},
            headers=admin_auth_headers,
        )
        assert response.status_code == 404
        assert response.json()['error']['code'] == 'CONTRIBUTION_NOT_FOUND'

    @pytest.mark.asyncio
    async def test_second_review_is_bad_request(
        self, client: AsyncClient, cse_semester, auth_headers, admin_auth_headers
    ):
        created = await client.post(
            '/api/v1/contributions',
            json=resource_payload(cse_semester.subjects[0].id),
            headers=auth_headers,
        )
        url = f"/api/v1/contributions/{created.json()['id']}"
        await client.patch(url, json={'action': 'APPROVE'}, headers=admin_auth_headers)

        response = await client.patch(url, json={'action': 'APPROVE'}, headers=admin_auth_headers)

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'CONTRIBUTION_ALREADY_REVIEWED'

    @pytest.mark.asyncio
    async def test_moderation_requires_admin(self, client: AsyncClient, auth_headers):
        response = await client.get('/api/v1/contributions', headers=auth_headers)
        assert response.status_code == 403

        response = await client.patch(
            '/api/v1/contributions/anything',
            json={'action': 'APPROVE'},
            headers=auth_headers,
        )
        assert response.status_code == 403
