"""Tests for the Flask JSON API"""
import io

import pytest

from tinydis.__version__ import __version__
from tinydis.web.server import create_app


@pytest.fixture
def client():
    app = create_app()
    app.config['TESTING'] = True
    return app.test_client()


def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok', 'version': __version__}


def test_disassemble_hex(client):
    response = client.post('/api/disassemble', json={'hex': '90 C3'})
    assert response.status_code == 200
    body = response.get_json()
    assert body['start'] == 0
    assert body['end'] == 2
    assert len(body['assembly']) == 2
    assert body['assembly'][1].startswith('0x00000001  C3')
    assert body['pseudocode'] == 'void function_0() {\n\n    return;\n}'
    assert body['skipped'] == 0


def test_disassemble_upload_with_offset(client):
    response = client.post(
        '/api/disassemble',
        data={'file': (io.BytesIO(b'\xff\xff\xb8\x34\x12'), 'boot.bin'), 'offset': '2'},
        content_type='multipart/form-data',
    )
    assert response.status_code == 200
    body = response.get_json()
    assert body['filename'] == 'boot.bin'
    assert body['start'] == 2
    assert body['assembly'] == [
        '0x00000002  ' + 'B8 34 12'.ljust(18) + ' ' + 'mov'.ljust(8) + ' ax, 0x1234'
    ]
    assert '    ax = 0x1234;' in body['pseudocode']


def test_disassemble_base_and_ceiling(client):
    response = client.post('/api/disassemble', json={
        'hex': 'FF 90 90 90', 'base': '7C00', 'max_bytes': 2,
    })
    body = response.get_json()
    assert body['start'] == 0x7C00
    assert body['end'] == 0x7C02
    assert body['skipped'] == 1
    assert body['pseudocode'].startswith('void function_7C00() {')


@pytest.mark.parametrize('fields,start,base', [
    ({'offset': 16}, 16, 0),
    ({'offset': '10'}, 0x10, 0),
    ({'offset': '0x10', 'base': 256}, 0x10, 0x100),
    ({'base': '100'}, 0, 0x100),
])
def test_disassemble_offset_fields(client, fields, start, base):
    response = client.post('/api/disassemble', json=dict({'hex': '90 ' * 32 + 'C3'}, **fields))
    assert response.status_code == 200
    body = response.get_json()
    assert body['start'] == base + start
    assert body['assembly'][0].startswith('0x%08X' % (base + start))


@pytest.mark.parametrize('payload', [
    {},
    {'hex': 'zz'},
    {'hex': '90', 'offset': 'nope'},
    {'hex': '90', 'offset': '10'},
    {'hex': '90', 'max_bytes': 0},
    {'hex': '90', 'max_bytes': 'many'},
    {'hex': [0x90, 0xC3]},
    {'hex': 90},
    {'hex': '90', 'offset': -1},
    {'hex': '90', 'offset': [1]},
    {'hex': '90', 'base': True},
])
def test_disassemble_rejects_bad_input(client, payload):
    response = client.post('/api/disassemble', json=payload)
    assert response.status_code == 400
    assert response.get_json()['error']


def test_disassemble_empty_upload(client):
    response = client.post(
        '/api/disassemble',
        data={'file': (io.BytesIO(b''), 'empty.bin')},
        content_type='multipart/form-data',
    )
    assert response.status_code == 400


def test_hexdump(client):
    response = client.post('/api/hexdump', json={'hex': '48 49'})
    assert response.status_code == 200
    assert '00000000  48 49' in response.get_json()['hexdump']


def test_hexdump_requires_data(client):
    response = client.post('/api/hexdump', json={})
    assert response.status_code == 400
