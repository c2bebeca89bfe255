import pytest

from quickadd import config


@pytest.mark.asyncio
async def test_api_parse(client):
    resp = await client.get('/parse', params={'text': 'Ship report #work @dev d/fri https://x.co', 'today': '2024-06-12'})
    assert resp.status_code == 200
    j = resp.json()
    assert j['clean_title'] == 'Ship report'
    assert j['tags'] == ['work']
    assert j['location_token'] == 'dev'
    assert j['deadline'] == '2024-06-14'
    assert j['scheduled_date'] is None
    assert j['url'] == 'https://x.co'


@pytest.mark.asyncio
async def test_api_parse_bad_today_is_422(client):
    resp = await client.get('/parse', params={'text': 'x', 'today': 'not-a-date'})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_api_resolve_date(client):
    resp = await client.get('/resolve_date', params={'text': 'call mom next monday', 'today': '2024-06-12'})
    assert resp.status_code == 200
    assert resp.json() == {'title': 'call mom', 'date': '2024-06-24', 'phrase': 'next monday'}


@pytest.mark.asyncio
async def test_api_resolve_date_no_match(client):
    resp = await client.get('/resolve_date', params={'text': 'buy milk', 'today': '2024-06-12'})
    assert resp.json() == {'title': 'buy milk', 'date': None, 'phrase': None}


@pytest.mark.asyncio
async def test_api_suggest(client):
    resp = await client.get('/suggest', params={'q': 'mon', 'today': '2024-06-12'})
    assert resp.status_code == 200
    j = resp.json()
    assert [s['id'] for s in j] == ['monday-1', 'monday-2']
    assert [s['date'] for s in j] == ['2024-06-17', '2024-06-24']


@pytest.mark.asyncio
async def test_api_suggest_deadline_mode(client):
    resp = await client.get('/suggest', params={'q': '', 'mode': 'deadline', 'today': '2024-06-12'})
    assert resp.status_code == 200
    j = resp.json()
    assert [s['id'] for s in j] == ['today', 'tomorrow', 'next-week', 'no-date']
    assert j[1]['display_label'] == 'Due Tomorrow'
    assert j[3]['display_label'] == 'No Deadline'


@pytest.mark.asyncio
async def test_api_suggest_unknown_mode(client):
    resp = await client.get('/suggest', params={'q': '', 'mode': 'bogus'})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_api_task_fields(client):
    payload = {
        'text': 'Refactor parser @Dev #code tomorrow',
        'today': '2024-06-12',
        'projects': [{'id': 'p-1', 'name': 'dev'}],
        'areas': [{'id': 'a-1', 'name': 'Dev'}],
    }
    resp = await client.post('/task_fields', json=payload)
    assert resp.status_code == 200
    j = resp.json()
    assert j['title'] == 'Refactor parser'
    assert j['project_id'] == 'p-1'
    assert j['area_id'] is None
    assert j['tags'] == ['code']
    assert j['scheduled_date'] == '2024-06-13'


@pytest.mark.asyncio
async def test_api_autocomplete(client):
    resp = await client.get('/autocomplete', params={'text': 'Buy milk #gro'})
    j = resp.json()
    assert j['tag'] == {'typing': True, 'query': 'gro'}
    assert j['location'] == {'typing': False, 'query': ''}


@pytest.mark.asyncio
async def test_api_uses_fixed_today(client, monkeypatch, now):
    monkeypatch.setattr(config, 'FIXED_TODAY', now)
    resp = await client.get('/resolve_date', params={'text': 'dentist tomorrow'})
    assert resp.json()['date'] == '2024-06-13'
    resp = await client.get('/health')
    assert resp.json() == {'ok': True, 'today': '2024-06-12'}


@pytest.mark.asyncio
async def test_api_suggest_huge_number_query(client):
    resp = await client.get('/suggest', params={'q': '9' * 5000, 'today': '2024-06-12'})
    assert resp.status_code == 200
    assert resp.json() == []
