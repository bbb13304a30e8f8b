"""
tests/test_web.py

Тесты Flask JSON API.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from web.app import create_app


@pytest.fixture
def client():
    """Крест из 5 клеток: B1, A2, B2(цель), C2, B3."""
    app = create_app('plus', secret_key='test')
    app.config['TESTING'] = True
    return app.test_client()


def test_geometry(client):
    data = client.get('/api/geometry').get_json()

    assert data['preset'] == 'plus'
    assert data['goal'] == 2
    assert data['labels'] == ['B1', 'A2', 'B2', 'C2', 'B3']
    assert data['cells'][0] == [0, 1]


def test_initial_state(client):
    data = client.get('/api/state').get_json()

    assert data['pegs'] == [0, 1, 2, 3, 4]
    assert data['in_setup'] is True
    assert data['can_undo'] is False
    assert data['can_reset'] is False
    assert data['active'] is None


def test_remove_undo_redo_reset(client):
    data = client.post('/api/remove', json={'cell': 'B2'}).get_json()
    assert data['success'] is True
    assert data['pegs'] == [0, 1, 3, 4]
    assert data['in_setup'] is False
    assert data['can_undo'] is True

    # Сессия сохраняется между запросами
    assert client.get('/api/state').get_json()['pegs'] == [0, 1, 3, 4]

    data = client.post('/api/undo').get_json()
    assert data['success'] is True
    assert data['in_setup'] is True
    assert data['can_redo'] is True

    data = client.post('/api/redo').get_json()
    assert data['pegs'] == [0, 1, 3, 4]

    data = client.post('/api/reset').get_json()
    assert data['pegs'] == [0, 1, 2, 3, 4]
    assert data['can_undo'] is False
    assert data['can_redo'] is False


def test_illegal_move(client):
    """B1 → B3 через пустой центр невозможен — success=False, состояние не меняется."""
    client.post('/api/remove', json={'cell': 2})

    data = client.post('/api/move', json={'source': 'B1', 'dest': 'B3'}).get_json()

    assert data['success'] is False
    assert data['pegs'] == [0, 1, 3, 4]


def test_move(client):
    client.post('/api/remove', json={'cell': 'B3'})

    data = client.post('/api/move', json={'source': 'B1', 'dest': 'B3'}).get_json()

    assert data['success'] is True
    assert data['pegs'] == [1, 3, 4]
    assert data['stuck'] is True


def test_click_and_select(client):
    client.post('/api/click', json={'cell': 'B3'})

    data = client.post('/api/click', json={'cell': 'B1'}).get_json()
    assert data['active'] == 0
    assert data['targets'] == [4]

    data = client.post('/api/select', json={'cell': None}).get_json()
    assert data['active'] is None

    data = client.post('/api/select', json={'cell': 'B1'}).get_json()
    assert data['active'] == 0

    data = client.post('/api/click', json={'cell': 'B3'}).get_json()
    assert data['success'] is True
    assert data['pegs'] == [1, 3, 4]


def test_hints(client):
    """Крест нерешаем: подсказок нет даже в режиме показа решения."""
    client.post('/api/remove', json={'cell': 'B3'})

    assert client.get('/api/state?show=1').get_json()['hints'] == []
    assert client.get('/api/state').get_json()['hints'] == []


@pytest.mark.parametrize("payload", [{}, {'cell': 'Z9'}, {'cell': 'A1'}, {'cell': 17}])
def test_invalid_cell(client, payload):
    response = client.post('/api/remove', json=payload)

    assert response.status_code == 400
    data = response.get_json()
    assert data['success'] is False
    assert data['error']


def test_background_worker():
    app = create_app('plus', secret_key='test', background=True)
    worker = app.extensions['peg_worker']
    client = app.test_client()

    client.post('/api/remove', json={'cell': 'B3'})
    client.get('/api/state?show=1')

    assert worker.wait(timeout=10)
    assert client.get('/api/state?show=1').get_json()['hints'] == []
    worker.stop()


def test_unknown_preset():
    from utils.error_handling import InvalidGeometryError
    with pytest.raises(InvalidGeometryError):
        create_app('hexagon')
