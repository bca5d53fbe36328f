"""Tests for the hand session and the opponent betting heuristic."""

import random

import pytest

from holdem_advisor.agents.decision import OpponentPolicy, longest_run
from holdem_advisor.agents.regret import Recommendation, RegretMatchingEngine
from holdem_advisor.errors import StreetOrderError
from holdem_advisor.models.action import ActionType
from holdem_advisor.models.card import parse_cards
from holdem_advisor.models.simulation import GamePhase, PlayerState, PlayerStatus
from holdem_advisor.simulation.engine import HandSession, street_bets


class AlwaysBet(OpponentPolicy):
    def decide(self, player, community, phase, max_bet_hit=False):
        return PlayerStatus.BETTING


class ScriptedEngine:
    """Checks when it can, otherwise calls; remembers every context it saw."""

    def __init__(self):
        self.contexts = []

    def train(self, context, iterations):
        self.contexts.append(context)

    def recommend_action(self, legal=None):
        legal = list(legal)
        for action in (ActionType.CHECK, ActionType.CALL, ActionType.FOLD):
            if action in legal:
                return Recommendation(action, 1.0, {action: 1.0})
        return Recommendation(legal[0], 1.0, {legal[0]: 1.0})


def _session(seed=7, **kwargs):
    return HandSession(rng=random.Random(seed), **kwargs)


def _run_out(session):
    session.deal_flop()
    session.deal_turn()
    session.deal_river()


class TestDealing:
    """Tests for dealing streets in order."""

    def test_deal_posts_antes(self):
        session = _session(ante=10, stack=500)
        session.deal()
        assert session.phase == GamePhase.PREFLOP
        assert session.pot.total_pot == 40
        assert all(len(p.hole_cards) == 2 for p in session.players)
        assert all(p.stack == 490 for p in session.players)

    def test_full_hand_uses_thirteen_unique_cards(self):
        session = _session()
        session.deal()
        _run_out(session)
        cards = [c for p in session.players for c in p.hole_cards] + session.community
        assert len(session.community) == 5
        assert len({c.title for c in cards}) == 13
        assert session.deck.remaining == 39

    def test_community_grows_by_street(self):
        session = _session()
        session.deal()
        assert len(session.deal_flop()) == 3
        assert len(session.deal_turn()) == 1
        assert len(session.deal_river()) == 1
        assert len(session.community) == session.phase.community_count

    def test_scores_follow_the_board(self):
        session = _session()
        session.deal()
        session.deal_flop()
        for p in session.players:
            assert p.score is not None
            assert p.best_hole_ranks[0] >= p.best_hole_ranks[1]

    def test_turn_before_flop(self):
        session = _session()
        session.deal()
        with pytest.raises(StreetOrderError):
            session.deal_turn()

    def test_flop_twice(self):
        session = _session()
        session.deal()
        session.deal_flop()
        with pytest.raises(StreetOrderError):
            session.deal_flop()

    def test_flop_before_deal(self):
        with pytest.raises(StreetOrderError):
            _session().deal_flop()

    def test_seat_limits(self):
        with pytest.raises(ValueError):
            HandSession(seats=5)
        with pytest.raises(ValueError):
            HandSession(seats=1)

    def test_seeded_sessions_match(self):
        a, b = _session(seed=99), _session(seed=99)
        a.deal()
        b.deal()
        assert [p.hole_cards for p in a.players] == [p.hole_cards for p in b.players]

    def test_street_bets_grow(self):
        bets = street_bets(random.Random(1), hands_played=2, ante=10)
        assert bets[GamePhase.PREFLOP] == 10
        assert 10 <= bets[GamePhase.FLOP] <= 70
        assert 70 <= bets[GamePhase.TURN] <= 120
        assert 120 <= bets[GamePhase.RIVER] <= 170


class TestBetting:
    """Tests for applying actions to the table."""

    def test_check_facing_bet(self):
        session = _session()
        session.deal()
        session.act(1, ActionType.RAISE, raise_amount=20)
        assert session.pot.to_call(0) == 20
        with pytest.raises(ValueError):
            session.act(0, ActionType.CHECK)

    def test_call_matches_bet(self):
        session = _session()
        session.deal()
        session.act(1, ActionType.RAISE, raise_amount=20)
        session.act(0, ActionType.CALL)
        assert session.pot.to_call(0) == 0
        assert session.player(0).status is PlayerStatus.BETTING

    def test_all_in(self):
        session = _session(stack=100)
        session.deal()
        session.act(0, ActionType.ALL_IN)
        hero = session.player(0)
        assert hero.stack == 0
        assert hero.status is PlayerStatus.ALL_IN
        assert hero.is_active
        assert session.max_bet_hit

    def test_fold_keeps_chips_in_pot(self):
        session = _session()
        session.deal()
        session.fold(2)
        assert session.player(2).is_folded
        assert session.pot.total_pot == 40
        assert len(session.active_players) == 3

    def test_context_reflects_bet_to_call(self):
        session = _session()
        session.deal()
        assert session.context_for(0).legal_actions == [
            ActionType.CHECK, ActionType.RAISE, ActionType.ALL_IN, ActionType.FOLD,
        ]
        session.act(1, ActionType.RAISE, raise_amount=20)
        context = session.context_for(0)
        assert not context.can_check
        assert context.can_call
        assert context.remaining_players == 4
        assert context.cards_dealt == 2

    def test_opponents_bet_street_size(self):
        session = _session(policy=AlwaysBet())
        session.deal()
        session.deal_flop()
        folded = session.play_opponents()
        flop_bet = session.bets[GamePhase.FLOP]
        assert folded == []
        for seat in (1, 2, 3):
            assert session.pot.get_player_bet(seat) == flop_bet
        assert session.pot.to_call(0) == flop_bet
        assert session.player(0).status is PlayerStatus.ACTIVE

    def test_advise_returns_legal_action(self):
        session = _session(policy=AlwaysBet())
        session.deal()
        session.deal_flop()
        session.play_opponents()
        engine = RegretMatchingEngine(rng=random.Random(5))
        rec = session.advise(0, engine, iterations=200)
        assert rec.action in session.context_for(0).legal_actions
        assert rec.action is not ActionType.CHECK


class TestShowdown:
    """Tests for ending a hand."""

    def test_showdown_pays_whole_pot(self):
        session = _session()
        session.deal()
        _run_out(session)
        result = session.showdown()
        assert result.pot == 40
        assert sum(result.payouts.values()) == pytest.approx(40)
        assert sum(p.stack for p in session.players) == pytest.approx(4 * 500)
        assert session.phase == GamePhase.COMPLETE
        assert session.pot.total_pot == 0

    def test_showdown_before_river(self):
        session = _session()
        session.deal()
        session.deal_flop()
        with pytest.raises(StreetOrderError):
            session.showdown()

    def test_last_player_standing_wins_early(self):
        session = _session()
        session.deal()
        for seat in (0, 1, 3):
            session.fold(seat)
        result = session.showdown()
        assert result.showdown.winners == {2}
        assert result.payouts == {2: 40.0}
        assert session.player(2).stack == 530


class TestPlayHand:
    """Tests for playing a whole hand with the hero following an engine."""

    def test_hero_answers_opponent_bets(self):
        """After opponents bet, the hero decides again facing the bet."""
        session = _session(policy=AlwaysBet())
        engine = ScriptedEngine()
        after_street = []
        result = session.play_hand(
            engine, iterations=1,
            on_street=lambda rec: after_street.append((rec.action, session.pot.to_call(0))),
        )
        assert any(c.can_call and not c.can_check for c in engine.contexts)
        assert len(engine.contexts) == 7
        assert [to_call for _, to_call in after_street] == [0, 0, 0, 0]
        assert [action for action, _ in after_street] == [
            ActionType.CHECK, ActionType.CALL, ActionType.CALL, ActionType.CALL,
        ]
        assert result.showdown.winners
        assert sum(result.payouts.values()) == pytest.approx(result.pot)

    def test_context_counts_all_chips_committed(self):
        """The hero's bet in the context covers every street so far."""
        session = _session(policy=AlwaysBet())
        engine = ScriptedEngine()
        session.play_hand(engine, iterations=1)
        flop, turn, river = (session.bets[p] for p in (GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER))
        assert engine.contexts[-1].player_bet == pytest.approx(10 + flop + turn)
        assert session.player(0).total_bet == pytest.approx(10 + flop + turn + river)

    def test_folded_hero_does_not_act(self):
        session = _session()
        session.deal()
        session.fold(0)
        assert session.hero_turn(ScriptedEngine(), iterations=1) is None

    def test_play_hand_with_regret_engine(self):
        session = _session(seed=21)
        engine = RegretMatchingEngine(rng=random.Random(21))
        result = session.play_hand(engine, iterations=50)
        assert session.phase == GamePhase.COMPLETE
        assert sum(p.stack for p in session.players) == pytest.approx(4 * 500)
        assert engine.state.iterations > 0
        assert result.pot >= 40


class TestOpponentPolicy:
    """Tests for the computer seats' betting heuristic."""

    def _decide(self, hole, board="", phase=GamePhase.PREFLOP, max_bet_hit=False):
        player = PlayerState(seat=1, hole_cards=parse_cards(hole))
        return OpponentPolicy().decide(player, parse_cards(board), phase, max_bet_hit)

    def test_preflop_junk_checks(self):
        assert self._decide("2c 7d") is PlayerStatus.CHECKING

    def test_preflop_ace_bets(self):
        assert self._decide("Ah 3c") is PlayerStatus.BETTING

    def test_preflop_pair_bets(self):
        assert self._decide("4c 4d") is PlayerStatus.BETTING

    def test_flop_pair_bets(self):
        assert self._decide("9c 4d", "9h Kc 2s", GamePhase.FLOP) is PlayerStatus.BETTING

    def test_river_nothing_checks(self):
        status = self._decide("3c 8d", "Jh Kc 2s 5d 9h", GamePhase.RIVER)
        assert status is PlayerStatus.CHECKING

    def test_river_pair_gives_up_after_all_in(self):
        status = self._decide("3c 3d", "Jh Kc 8s 5d 2h", GamePhase.RIVER, max_bet_hit=True)
        assert status is PlayerStatus.CHECKING

    def test_settle_round_folds_checkers(self):
        players = [
            PlayerState(seat=1, status=PlayerStatus.BETTING),
            PlayerState(seat=2, status=PlayerStatus.CHECKING),
            PlayerState(seat=3, status=PlayerStatus.FOLDED),
        ]
        assert OpponentPolicy().settle_round(players) == [2]
        assert players[1].is_folded

    def test_settle_round_without_bettors(self):
        players = [PlayerState(seat=1, status=PlayerStatus.CHECKING)]
        assert OpponentPolicy().settle_round(players) == []
        assert not players[0].is_folded

    def test_longest_run(self):
        assert longest_run(parse_cards("Ah 2d 3c")) == 3
        assert longest_run(parse_cards("9h Td Jc Qs")) == 4
        assert longest_run(parse_cards("2h 9d")) == 1
