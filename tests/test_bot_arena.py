from bots.baseline_greedy import GreedyBot
from bots.bot_arena import play_game, run_match
from bots.random_bot import RandomBot
from wizard.events import GameEventType, RoundComplete
from wizard.rules_schema import RuleSet
from wizard.state import GamePhase


def _strategies():
    return [GreedyBot(), RandomBot(seed=1), RandomBot(seed=2), GreedyBot()]


def test_bots_play_a_full_game():
    game, events = play_game(_strategies(), seed=3)
    assert game.phase is GamePhase.GAME_END
    assert game.round == game.max_rounds == 15
    assert all(len(player.round_history) == 15 for player in game.players)
    assert events[-1].type is GameEventType.GAME_COMPLETE
    assert events[-1].winner_id == game.winner().id


def test_every_round_awards_one_trick_per_card():
    _, events = play_game(_strategies(), seed=5, rules=RuleSet(max_rounds=6))
    completed = [event for event in events if isinstance(event, RoundComplete)]
    assert [event.round for event in completed] == [1, 2, 3, 4, 5, 6]
    for event in completed:
        assert sum(score.tricks_won for score in event.scores) == event.round


def test_same_seed_same_game():
    first, _ = play_game(_strategies(), seed=21, rules=RuleSet(max_rounds=5))
    second, _ = play_game(_strategies(), seed=21, rules=RuleSet(max_rounds=5))
    assert [p.score for p in first.players] == [p.score for p in second.players]
    assert [p.round_history for p in first.players] == [p.round_history for p in second.players]


def test_arena_waits_for_host_between_rounds():
    game, _ = play_game(_strategies()[:3], seed=8, rules=RuleSet(max_rounds=3, auto_advance_rounds=False))
    assert game.phase is GamePhase.GAME_END
    assert game.round == 3


def test_run_match_executes():
    results = run_match([GreedyBot(), RandomBot(seed=4), RandomBot(seed=5)], n_games=2, seed=7,
                        rules=RuleSet(max_rounds=3))
    assert sum(results["wins"]) == 2
    assert len(results["history"]) == 2
