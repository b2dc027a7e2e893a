import logging
import random
from typing import Dict, FrozenSet, Iterable, List, Optional, Any
from pydantic import BaseModel, Field, ConfigDict

from .bag import TileBag
from .board import Board
from .extractor import extract_word
from .hand import Hand
from .models import (
    CellState,
    CommandResult,
    Coord,
    Failure,
    GameConfig,
    Letter,
    Reward,
    RoundState,
    INDEX_OUT_OF_RANGE,
    NO_LETTER_AT_CELL,
)
from .swap import SwapController
from .validator import validate_placement


log = logging.getLogger("wordsland")


def normalize_words(words: Iterable[str]) -> FrozenSet[str]:
    """Trim and uppercase dictionary entries, dropping blanks."""
    return frozenset(w.strip().upper() for w in words if w and w.strip())


class WordsLandGame(BaseModel):
    """
    Top-level game engine.

    Owns the board, tile bag, hand, round progress and swap mode. Every
    command runs to completion and returns a CommandResult; rule failures
    leave the state untouched and are reported in the result.

    Attributes:
        config: Game configuration
        board: The current round's board
        bag: The current round's tile bag
        hand: The player's rack (persists across rounds)
        round: Round number, opening-move flag, start/target
        swap: Swap mode state
        dictionary: Valid uppercase words (empty until loaded)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig = Field(default_factory=GameConfig)
    board: Board
    bag: TileBag
    hand: Hand
    round: RoundState = Field(default_factory=RoundState)
    swap: SwapController = Field(default_factory=SwapController)
    dictionary: FrozenSet[str] = Field(default_factory=frozenset)
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.config.seed)

    @classmethod
    def create(
        cls,
        config: Optional[GameConfig] = None,
        dictionary: Optional[Iterable[str]] = None,
        rng: Optional[random.Random] = None,
        board: Optional[Board] = None,
        bag: Optional[TileBag] = None,
        **config_kwargs: Any
    ) -> "WordsLandGame":
        """
        Factory method to create a game with a first round ready to play.

        Args:
            config: Optional GameConfig instance
            dictionary: Valid words; may also be supplied later via set_dictionary
            rng: Random generator shared by board, bag and rewards
                (defaults to random.Random(config.seed))
            board: Fixed board for the first round instead of a generated one
            bag: Fixed tile bag for the first round instead of a fresh one
            **config_kwargs: Config parameters if config not provided

        Returns:
            Configured WordsLandGame instance with a full hand
        """
        if config is None:
            config = GameConfig(**config_kwargs)

        rng = rng or random.Random(config.seed)

        if board is None:
            board = cls._generate_board(config, rng)
        if bag is None:
            bag = TileBag.create(rng=rng)

        hand = Hand(capacity=config.hand_size)
        hand.refill(bag)

        game = cls(
            config=config,
            board=board,
            bag=bag,
            hand=hand,
            round=RoundState(round_number=1, start=board.start, target=board.target),
            dictionary=normalize_words(dictionary or []),
        )
        game._rng = rng
        log.info(
            "Round 1 started: %dx%d board, start=%s target=%s",
            board.rows, board.columns, board.start, board.target,
        )
        return game

    @staticmethod
    def _generate_board(config: GameConfig, rng: random.Random) -> Board:
        return Board.generate(
            config.rows,
            config.columns,
            rng,
            obstacle_count=config.obstacle_count,
            reward_count=config.reward_count,
            reward_min=config.reward_min,
            reward_max=config.reward_max,
        )

    def set_dictionary(self, words: Iterable[str]) -> None:
        """Install the word list once the loader has finished."""
        self.dictionary = normalize_words(words)
        log.info("Dictionary loaded with %d words", len(self.dictionary))

    def _result(self, command: str, failures: Optional[List[Failure]] = None, **kwargs: Any) -> CommandResult:
        failures = failures or []
        if failures:
            log.debug("%s rejected: %s", command, failures[0].code)
        return CommandResult(
            ok=not failures,
            command=command,
            failures=failures,
            round_number=self.round.round_number,
            **kwargs
        )

    # Placement commands

    def place_letter(self, hand_index: int, coord: Coord) -> CommandResult:
        """Move a letter from the hand onto the board as an uncommitted Letter."""
        if not self.hand.is_valid_index(hand_index):
            return self._result("place", [Failure(
                code=INDEX_OUT_OF_RANGE,
                message=f"Hand index {hand_index} out of range (hand has {len(self.hand)} tiles)",
            )])

        failure = self.board.place(coord, self.hand.letters[hand_index])
        if failure is not None:
            return self._result("place", [failure])

        self.hand.take(hand_index)
        return self._result("place")

    def move_letter(self, source: Coord, destination: Coord) -> CommandResult:
        """Move an uncommitted letter from one cell to another."""
        cell = self.board.get(source)
        if not isinstance(cell, Letter):
            return self._result("move", [Failure(
                code=NO_LETTER_AT_CELL,
                message=f"No uncommitted letter at {tuple(source)}",
                coord=source,
            )])

        letter = self.board.uncover(source)
        failure = self.board.place(destination, letter)
        if failure is not None:
            # Put it back where it was
            self.board.place(source, letter)
            return self._result("move", [failure])

        return self._result("move")

    def recall_letter(self, coord: Coord) -> CommandResult:
        """Return a single uncommitted letter to the hand."""
        letter = self.board.uncover(coord)
        if letter is None:
            return self._result("recall", [Failure(
                code=NO_LETTER_AT_CELL,
                message=f"No uncommitted letter at {tuple(coord)}",
                coord=coord,
            )])

        self.hand.add_tiles([letter])
        return self._result("recall")

    def recall_all(self) -> CommandResult:
        """Return every uncommitted letter to the hand."""
        recalled = []
        for coord, _ in self.board.uncommitted():
            recalled.append(self.board.uncover(coord))
        self.hand.add_tiles(recalled)

        if recalled:
            log.debug("Recalled %d tiles", len(recalled))
        return self._result("recall_all")

    # Round controller

    def commit_word(self) -> CommandResult:
        """
        Validate the uncommitted letters and lock them in.

        On success rewards covered by the new letters are added to the bag,
        and either the hand is replenished or, if the target was reached,
        a new round starts.
        """
        extracted, failure = extract_word(self.board)
        if failure is not None:
            return self._result("commit", [failure])

        failures = validate_placement(extracted, self.board, self.round, self.dictionary)
        if failures:
            return self._result("commit", failures)

        new_coords = extracted.new_coords
        underneath = self.board.commit(new_coords)

        rewards: List[Reward] = []
        for coord, state in underneath.items():
            if isinstance(state, Reward):
                self.bag.add_tiles(state.count, state.tile_class)
                rewards.append(state)

        self.round.first_word_played = True
        log.info("Committed '%s'", extracted.word)

        if self.round.target in new_coords:
            log.info("Target reached in round %d", self.round.round_number)
            self.start_new_round()
            return self._result(
                "commit",
                word=extracted.word,
                round_won=True,
                drawn=list(self.hand.letters),
                rewards_applied=rewards,
            )

        drawn = self.hand.refill(self.bag)
        return self._result("commit", word=extracted.word, drawn=drawn, rewards_applied=rewards)

    def start_new_round(self) -> CommandResult:
        """Advance to the next round with a fresh board, bag and hand."""
        self.board = self._generate_board(self.config, self._rng)
        self.bag = TileBag.create(rng=self._rng)
        self.round = RoundState(
            round_number=self.round.round_number + 1,
            first_word_played=False,
            start=self.board.start,
            target=self.board.target,
        )
        self.swap = SwapController()

        self.hand.clear()
        drawn = self.hand.refill(self.bag)

        log.info(
            "Round %d started: start=%s target=%s",
            self.round.round_number, self.board.start, self.board.target,
        )
        return self._result("new_round", drawn=drawn)

    # Swap commands

    def enter_swap_mode(self) -> CommandResult:
        self.swap.enter()
        return self._result("swap")

    def toggle_swap_selection(self, hand_index: int) -> CommandResult:
        failure = self.swap.toggle(hand_index, len(self.hand))
        return self._result("select", [failure] if failure else None)

    def confirm_swap(self) -> CommandResult:
        drawn = self.swap.confirm(self.hand, self.bag)
        return self._result("confirm", drawn=drawn)

    # Queries

    def board_snapshot(self) -> Dict[Coord, CellState]:
        return self.board.snapshot()

    def hand_letters(self) -> List[str]:
        return list(self.hand.letters)

    def tile_bag_remaining(self) -> int:
        return self.bag.tiles_remaining

    def round_number(self) -> int:
        return self.round.round_number

    def is_swap_mode_active(self) -> bool:
        return self.swap.active

    def swap_selection(self) -> List[int]:
        return sorted(self.swap.selected)

    def has_dictionary(self) -> bool:
        return bool(self.dictionary)

    def get_state(self) -> Dict:
        """
        Get the current game state as a dictionary.

        Useful for display and logging.
        """
        return {
            "round_number": self.round.round_number,
            "first_word_played": self.round.first_word_played,
            "start": tuple(self.board.start),
            "target": tuple(self.board.target),
            "hand": self.hand_letters(),
            "tiles_remaining": self.tile_bag_remaining(),
            "letters_on_board": self.board.letter_count(),
            "swap_mode": self.swap.active,
            "swap_selection": self.swap_selection(),
            "dictionary_size": len(self.dictionary),
        }
