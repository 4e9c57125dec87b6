"""
Tests for the bot arena and ELO ratings.
"""
import json
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from othello.arena import Arena, BotPlayer, ELORatingSystem, expected_score
from othello.config import ArenaConfig, SearchConfig


def test_expected_score():
    assert expected_score(1500, 1500) == pytest.approx(0.5)
    assert expected_score(1900, 1500) == pytest.approx(10 / 11)
    assert expected_score(1500, 1900) == pytest.approx(1 / 11)


def test_record_game():
    elo = ELORatingSystem(k=32, initial_rating=1500)
    elo.register('minimax', 'minimax', 3)
    entry = elo.record_game('minimax', 'b', 1.0)

    assert elo.players['minimax'].rating == pytest.approx(1516)
    assert elo.players['b'].rating == pytest.approx(1484)
    assert entry['elo_black_before'] == 1500
    assert entry['black_strategy'] == 'minimax'
    assert entry['black_depth'] == 3
    assert entry['white_strategy'] is None
    assert elo.players['minimax'].wins == 1
    assert elo.players['b'].losses == 1
    assert [p['player_id'] for p in elo.get_leaderboard()] == ['minimax', 'b']


def test_draw_between_unequal_players_moves_ratings_together():
    elo = ELORatingSystem(k=32)
    elo.register('strong').rating = 1700
    elo.record_game('weak', 'strong', 0.5)

    assert elo.players['weak'].rating > 1500
    assert elo.players['strong'].rating < 1700
    assert elo.players['weak'].rating + elo.players['strong'].rating == pytest.approx(3200)
    assert elo.players['weak'].draws == elo.players['strong'].draws == 1


def test_ratings_save_and_load(tmp_path):
    elo = ELORatingSystem(k=16)
    elo.register('greedy', 'greedy')
    elo.record_game('greedy', 'b', 0.5)
    path = tmp_path / "elo.json"
    elo.save_ratings(str(path))

    loaded = ELORatingSystem.load_ratings(str(path))
    assert loaded.k == 16
    assert loaded.players == elo.players
    assert loaded.players['greedy'].strategy == 'greedy'
    assert len(loaded.history) == 1


def test_play_game():
    arena = Arena()
    arena.add_player(BotPlayer('random', 'random', SearchConfig(seed=1)))
    arena.add_player(BotPlayer('greedy', 'greedy'))

    assert arena.play_game('random', 'greedy') in (0.0, 0.5, 1.0)
    with pytest.raises(ValueError):
        arena.play_game('random', 'nobody')


def test_run_tournament(tmp_path):
    arena = Arena.from_config(ArenaConfig(k_factor=20))
    arena.add_player(BotPlayer('random', 'easy', SearchConfig(seed=3)))
    arena.add_player(BotPlayer('minimax', 'hard', SearchConfig(depth=1)))

    results = arena.run_tournament(rounds=2, show_progress=False)

    assert results['games_played'] == 2
    matchup = results['matchups']['random_vs_minimax']
    assert matchup['wins1'] + matchup['wins2'] + matchup['draws'] == 2
    blacks = [game['black'] for r in results['rounds'] for game in r['games']]
    assert sorted(blacks) == ['minimax', 'random'], "Colours alternate between rounds"
    assert len(results['leaderboard']) == 2
    assert arena.elo.k == 20
    assert arena.elo.players['minimax'].depth == 1
    assert arena.elo.players['random'].depth is None
    games = [game for r in results['rounds'] for game in r['games']]
    assert {g['black_strategy'] for g in games} == {'random', 'minimax'}
    table = arena.format_leaderboard()
    assert "Rank" in table
    assert "minimax" in table

    out = tmp_path / "results" / "tournament.json"
    arena.save_results(str(out))
    assert len(json.loads(out.read_text())) == 2
    assert (tmp_path / "results" / "tournament_elo.json").exists()


def test_tournament_needs_two_players():
    arena = Arena()
    arena.add_player(BotPlayer('solo', 'random'))
    with pytest.raises(ValueError):
        arena.run_tournament(rounds=1, show_progress=False)
