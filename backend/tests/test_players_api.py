from sqlalchemy.exc import OperationalError

from roster import db
from roster.models import Player


def test_create_player(client):
    res = client.post('/api/players', json={'name': '  Alice  ', 'rank': 2, 'level': 15})
    assert res.status_code == 201
    player = res.get_json()['player']
    assert player['name'] == 'Alice'
    assert player['rank'] == 2
    assert player['level'] == 15
    assert player['id']


def test_create_player_requires_name(client):
    res = client.post('/api/players', json={'name': '   ', 'rank': 1, 'level': 1})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Name is required'
    res = client.post('/api/players', json={'rank': 1, 'level': 1})
    assert res.status_code == 400


def test_create_player_rank_bounds(client):
    for rank in (0, 5, '3', None, True):
        res = client.post('/api/players', json={'name': 'Bob', 'rank': rank, 'level': 10})
        assert res.status_code == 400, rank
        assert res.get_json()['error'] == 'Rank must be between 1 and 4'
    for rank in (1, 4):
        res = client.post('/api/players', json={'name': f'Bob{rank}', 'rank': rank, 'level': 10})
        assert res.status_code == 201


def test_create_player_level_bounds(client):
    for level in (0, 31, 2.5):
        res = client.post('/api/players', json={'name': 'Cara', 'rank': 1, 'level': level})
        assert res.status_code == 400
        assert res.get_json()['error'] == 'Level must be between 1 and 30'
    assert client.post('/api/players', json={'name': 'Cara', 'rank': 1, 'level': 30}).status_code == 201
    assert Player.query.count() == 1


def test_list_players_ordered_by_rank_then_name(client, make_player):
    make_player(name='B', rank=2)
    make_player(name='Z', rank=1)
    make_player(name='A', rank=1)
    res = client.get('/api/players')
    assert res.status_code == 200
    players = res.get_json()['players']
    assert [(p['rank'], p['name']) for p in players] == [(1, 'A'), (1, 'Z'), (2, 'B')]


def test_update_player_partial(client, make_player):
    player = make_player(name='Alice', rank=1, level=10)
    res = client.patch(f"/api/players/{player['id']}", json={'level': 12})
    assert res.status_code == 200
    updated = res.get_json()['player']
    assert updated['id'] == player['id']
    assert updated['level'] == 12
    assert updated['rank'] == 1
    assert updated['name'] == 'Alice'


def test_update_player_allows_rank_five_and_null(client, make_player):
    player = make_player(rank=4)
    res = client.patch(f"/api/players/{player['id']}", json={'rank': 5})
    assert res.status_code == 200
    assert res.get_json()['player']['rank'] == 5
    res = client.patch(f"/api/players/{player['id']}", json={'rank': None, 'level': None})
    assert res.status_code == 200
    cleared = res.get_json()['player']
    assert cleared['rank'] is None
    assert cleared['level'] is None


def test_update_player_bounds(client, make_player):
    player = make_player(rank=2, level=10)
    for rank in (0, 6):
        res = client.patch(f"/api/players/{player['id']}", json={'rank': rank})
        assert res.status_code == 400
        assert res.get_json()['error'] == 'Rank must be between 1 and 5'
    res = client.patch(f"/api/players/{player['id']}", json={'level': 31})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Level must be between 1 and 30'
    stored = db.session.get(Player, player['id'])
    assert stored.rank == 2
    assert stored.level == 10


def test_update_player_without_fields_is_rejected(client, make_player, monkeypatch):
    player = make_player()
    commits = []
    monkeypatch.setattr(db.session, 'commit', lambda: commits.append(1))
    for body in ({}, {'unknown': 1}, {'name': '   '}):
        res = client.patch(f"/api/players/{player['id']}", json=body)
        assert res.status_code == 400
        assert res.get_json()['error'] == 'No valid fields provided for update'
    assert commits == []


def test_update_unknown_player(client):
    res = client.patch('/api/players/999', json={'name': 'Ghost'})
    assert res.status_code == 404
    assert res.get_json()['error'] == 'Player not found'


def test_store_failure_surfaces_as_500(client, monkeypatch):
    def boom():
        raise OperationalError('INSERT INTO players', {}, Exception('database is locked'))

    monkeypatch.setattr(db.session, 'commit', boom)
    res = client.post('/api/players', json={'name': 'Dana', 'rank': 1, 'level': 1})
    assert res.status_code == 500
    assert res.get_json()['error'] == 'database is locked'


def test_players_without_rank_sort_last(client, make_player):
    unranked = make_player(name='Aaron', rank=1)
    make_player(name='Zoe', rank=4)
    make_player(name='Mia', rank=2)
    assert client.patch(f"/api/players/{unranked['id']}", json={'rank': None}).status_code == 200
    players = client.get('/api/players').get_json()['players']
    assert [p['name'] for p in players] == ['Mia', 'Zoe', 'Aaron']
