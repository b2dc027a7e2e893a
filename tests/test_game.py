"""
Test suite for the game engine commands.

Covers placement and recall, committing words (opening move, connection,
dictionary), rewards, round progression and the game-wide invariants:
tile conservation and permanence of locked letters.
"""

from collections import Counter

import pytest

from wordsland.engine import (
    Board,
    Coord,
    GameConfig,
    Letter,
    LockedLetter,
    Reward,
    WordsLandGame,
    EMPTY,
    OBSTACLE,
    START,
)


def total_tiles(game: WordsLandGame) -> int:
    return game.tile_bag_remaining() + len(game.hand_letters()) + game.board.letter_count()


class TestCreate:
    """Test cases for game creation."""

    def test_default_game(self):
        game = WordsLandGame.create(seed=1)
        assert game.round_number() == 1
        assert len(game.hand_letters()) == 8
        assert game.tile_bag_remaining() == 196 - 8
        assert game.board.rows == 24
        assert game.board.columns == 15
        assert game.has_dictionary() is False

    def test_same_seed_same_game(self):
        a = WordsLandGame.create(seed=11)
        b = WordsLandGame.create(seed=11)
        assert a.hand_letters() == b.hand_letters()
        assert a.board_snapshot() == b.board_snapshot()

    def test_custom_hand_size(self):
        game = WordsLandGame.create(GameConfig(seed=2, hand_size=5))
        assert len(game.hand_letters()) == 5

    def test_dictionary_normalized(self):
        game = WordsLandGame.create(seed=1, dictionary=[" cat ", "Dog", ""])
        assert game.dictionary == frozenset({"CAT", "DOG"})

    def test_get_state(self, game):
        state = game.get_state()
        assert state["round_number"] == 1
        assert state["start"] == (5, 5)
        assert state["hand"] == list("CATSEOND")
        assert state["swap_mode"] is False


class TestPlacement:
    """Test cases for placing, moving and recalling letters."""

    def test_place_moves_letter_from_hand(self, game):
        result = game.place_letter(0, Coord(5, 5))
        assert result.ok is True
        assert game.board.get(Coord(5, 5)) == Letter(char="C")
        assert game.hand_letters() == list("ATSEOND")

    def test_place_bad_index(self, game):
        result = game.place_letter(8, Coord(5, 5))
        assert result.ok is False
        assert result.failure.code == "INDEX_OUT_OF_RANGE"
        assert game.board.get(Coord(5, 5)) == START

    def test_place_on_obstacle_keeps_hand(self, game):
        game.board.set_cell(Coord(1, 1), OBSTACLE)
        result = game.place_letter(0, Coord(1, 1))
        assert result.failure.code == "CELL_OCCUPIED_ILLEGALLY"
        assert game.board.get(Coord(1, 1)) == OBSTACLE
        assert len(game.hand_letters()) == 8

    def test_move_letter(self, game):
        game.place_letter(0, Coord(4, 4))
        result = game.move_letter(Coord(4, 4), Coord(5, 5))
        assert result.ok is True
        assert game.board.get(Coord(4, 4)) == EMPTY
        assert game.board.get(Coord(5, 5)) == Letter(char="C")
        assert game.board.covered[Coord(5, 5)] == START

    def test_move_to_blocked_cell_restores(self, game):
        game.place_letter(0, Coord(5, 5))
        game.board.set_cell(Coord(5, 6), LockedLetter(char="Z"))
        result = game.move_letter(Coord(5, 5), Coord(5, 6))
        assert result.failure.code == "CELL_OCCUPIED_ILLEGALLY"
        assert game.board.get(Coord(5, 5)) == Letter(char="C")
        assert game.board.covered[Coord(5, 5)] == START

    def test_move_from_empty_cell(self, game):
        result = game.move_letter(Coord(0, 0), Coord(1, 1))
        assert result.failure.code == "NO_LETTER_AT_CELL"

    def test_recall_letter(self, game):
        game.place_letter(0, Coord(5, 5))
        result = game.recall_letter(Coord(5, 5))
        assert result.ok is True
        assert game.board.get(Coord(5, 5)) == START
        assert game.hand_letters()[-1] == "C"
        assert len(game.hand_letters()) == 8

    def test_recall_letter_nothing_there(self, game):
        assert game.recall_letter(Coord(0, 0)).failure.code == "NO_LETTER_AT_CELL"

    def test_recall_all_restores_cells(self, game, place_word):
        reward = Reward(count=2, tile_class="VOWELS")
        game.board.set_cell(Coord(5, 6), reward)
        place_word(game, "CAT", Coord(5, 5))

        result = game.recall_all()

        assert result.ok is True
        assert game.board.get(Coord(5, 5)) == START
        assert game.board.get(Coord(5, 6)) == reward
        assert game.board.get(Coord(5, 7)) == EMPTY
        assert game.board.covered == {}
        assert Counter(game.hand_letters()) == Counter("CATSEOND")


class TestCommit:
    """Test cases for entering words."""

    def test_first_word(self, game, place_word):
        """Place CAT on the start and commit."""
        place_word(game, "CAT", Coord(5, 5))
        result = game.commit_word()

        assert result.ok is True
        assert result.word == "CAT"
        for i, ch in enumerate("CAT"):
            assert game.board.get(Coord(5, 5 + i)) == LockedLetter(char=ch)
        assert game.round.first_word_played is True
        assert game.board.covered == {}
        assert len(game.hand_letters()) == 8
        assert result.drawn == game.hand_letters()[-3:]

    def test_second_word_extends_first(self, game, place_word):
        place_word(game, "CAT", Coord(5, 5))
        game.commit_word()

        game.place_letter(game.hand.letters.index("S"), Coord(5, 8))
        result = game.commit_word()

        assert result.ok is True
        assert result.word == "CATS"
        assert game.board.get(Coord(5, 8)) == LockedLetter(char="S")

    def test_not_collinear_leaves_board(self, game):
        game.place_letter(0, Coord(5, 5))
        game.place_letter(0, Coord(6, 6))
        before = game.board_snapshot()

        result = game.commit_word()

        assert result.failure.code == "INVALID_PLACEMENT_GEOMETRY"
        assert game.board_snapshot() == before

    def test_must_cover_start(self, game, place_word):
        place_word(game, "AT", Coord(10, 3))
        hand_before = game.hand_letters()

        result = game.commit_word()

        assert result.failure.code == "MUST_COVER_START"
        assert game.board.get(Coord(10, 3)) == Letter(char="A")
        assert game.board.get(Coord(10, 4)) == Letter(char="T")
        assert game.hand_letters() == hand_before
        assert game.round.first_word_played is False

    def test_first_move_gate_ignores_word_validity(self, game, place_word):
        game.hand.set_letters(list("XQXQXQXQ"))
        place_word(game, "XQ", Coord(10, 3))
        result = game.commit_word()
        assert result.failure.code == "MUST_COVER_START"

    def test_no_letters(self, game):
        assert game.commit_word().failure.code == "NO_LETTERS_PLACED"

    def test_disconnected_second_word(self, game, place_word):
        place_word(game, "CAT", Coord(5, 5))
        game.commit_word()
        game.hand.set_letters(list("TOTOTOTO"))

        place_word(game, "TO", Coord(15, 2))
        result = game.commit_word()

        assert result.failure.code == "DISCONNECTED_PLACEMENT"

    def test_word_not_in_dictionary(self, game, place_word):
        place_word(game, "CTA", Coord(5, 5))
        result = game.commit_word()
        assert result.failure.code == "WORD_NOT_IN_DICTIONARY"
        assert "CTA" in result.failure.message

    def test_dictionary_loaded_late(self, board, place_word):
        """Before the dictionary arrives every word is rejected."""
        game = WordsLandGame.create(GameConfig(seed=3), board=board)
        game.hand.set_letters(list("CATSEOND"))
        place_word(game, "CAT", Coord(5, 5))
        assert game.commit_word().failure.code == "WORD_NOT_IN_DICTIONARY"

        game.set_dictionary(["cat"])
        assert game.commit_word().ok is True

    def test_lowercase_dictionary_matches(self, board, place_word):
        game = WordsLandGame.create(GameConfig(seed=3), board=board, dictionary=["cat"])
        game.hand.set_letters(list("CATSEOND"))
        place_word(game, "CAT", Coord(5, 5))
        assert game.commit_word().ok is True


class TestRewards:
    """Test cases for reward cells."""

    def test_reward_adds_tiles(self, game, place_word):
        reward = Reward(count=3, tile_class="VOWELS")
        game.board.set_cell(Coord(5, 6), reward)
        bag_before = game.tile_bag_remaining()

        place_word(game, "CAT", Coord(5, 5))
        result = game.commit_word()

        assert result.ok is True
        assert result.rewards_applied == [reward]
        # +3 reward tiles, -3 drawn to refill the hand
        assert game.tile_bag_remaining() == bag_before
        assert game.board.get(Coord(5, 6)) == LockedLetter(char="A")

    def test_recalled_reward_not_applied(self, game, place_word):
        game.board.set_cell(Coord(8, 8), Reward(count=5, tile_class="ANY"))
        game.place_letter(0, Coord(8, 8))
        game.recall_all()
        place_word(game, "CAT", Coord(5, 5))
        result = game.commit_word()
        assert result.rewards_applied == []


class TestRounds:
    """Test cases for reaching the target."""

    @pytest.fixture
    def near_target(self, small_dictionary):
        board = Board.empty(24, 15, start=Coord(5, 5), target=Coord(5, 7))
        game = WordsLandGame.create(GameConfig(seed=5), dictionary=small_dictionary, board=board)
        game.hand.set_letters(list("CATSEOND"))
        return game

    def test_target_wins_round(self, near_target, place_word):
        place_word(near_target, "CAT", Coord(5, 5))
        result = near_target.commit_word()

        assert result.ok is True
        assert result.round_won is True
        assert result.round_number == 2
        assert near_target.round_number() == 2
        assert near_target.round.first_word_played is False
        assert near_target.board.letter_count() == 0
        assert len(near_target.hand_letters()) == 8
        assert near_target.tile_bag_remaining() == 196 - 8

    def test_round_won_only_once(self, near_target, place_word):
        place_word(near_target, "CAT", Coord(5, 5))
        near_target.commit_word()

        again = near_target.commit_word()

        assert again.ok is False
        assert near_target.round_number() == 2

    def test_failed_commit_on_target_does_not_win(self, near_target, place_word):
        place_word(near_target, "CTA", Coord(5, 5))
        result = near_target.commit_word()
        assert result.round_won is False
        assert near_target.round_number() == 1

    def test_start_new_round_explicitly(self, game):
        result = game.start_new_round()
        assert result.ok is True
        assert result.round_number == 2
        assert game.round.start == game.board.start
        assert game.board.get(game.board.start) == START


class TestInvariants:
    """Game-wide invariants."""

    def test_conservation_through_a_turn(self, board):
        game = WordsLandGame.create(GameConfig(seed=21), board=board)
        hand = game.hand_letters()
        game.set_dictionary([hand[0] + hand[1]])
        assert total_tiles(game) == 196

        game.place_letter(0, Coord(5, 5))
        game.place_letter(0, Coord(5, 6))
        assert total_tiles(game) == 196

        game.recall_all()
        assert total_tiles(game) == 196

        game.place_letter(game.hand.letters.index(hand[0]), Coord(5, 5))
        game.place_letter(game.hand.letters.index(hand[1]), Coord(5, 6))
        assert game.commit_word().ok is True
        assert total_tiles(game) == 196

    def test_conservation_with_reward(self, game, place_word):
        total = total_tiles(game)
        game.board.set_cell(Coord(5, 7), Reward(count=2, tile_class="ANY"))
        place_word(game, "CAT", Coord(5, 5))
        game.commit_word()
        assert total_tiles(game) == total + 2

    def test_locked_letters_are_permanent(self, game, place_word):
        place_word(game, "CAT", Coord(5, 5))
        game.commit_word()
        locked = {c: s for c, s in game.board_snapshot().items() if isinstance(s, LockedLetter)}

        game.recall_all()
        game.recall_letter(Coord(5, 5))
        game.move_letter(Coord(5, 6), Coord(9, 9))
        game.place_letter(0, Coord(5, 7))
        game.board.uncover(Coord(5, 7))

        for coord, state in locked.items():
            assert game.board.get(coord) == state
