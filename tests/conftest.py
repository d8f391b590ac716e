"""
Shared fixture problems for the local search tests.

- EightQueens: N queens on an N x N board, one queen per row. A board is a
  tuple of column indices; cost is the number of attacking pairs.
- ArrayQueens: the same problem with the board held in a numpy array.
- ScriptedProblem: tiny lookup-table problem with a fixed neighbor list, for
  deterministic step-by-step checks.
"""

import random
from typing import Optional

import numpy as np
import pytest

from localsearch import Penalty


class EightQueens:
	"""N-Queens with one queen per row; moves are (row, new_col)."""

	def __init__(self, size: int = 8):
		self.size = size

	def init_solution(self, rng: random.Random) -> tuple:
		cols = list(range(self.size))
		rng.shuffle(cols)
		return tuple(cols)

	def _row_conflicts(self, board: tuple, row: int, col: int) -> int:
		conflicts = 0
		for other, other_col in enumerate(board):
			if other == row:
				continue
			if other_col == col or abs(other_col - col) == abs(other - row):
				conflicts += 1
		return conflicts

	def cost(self, board: tuple) -> float:
		conflicts = 0
		for i in range(self.size):
			for j in range(i + 1, self.size):
				if board[i] == board[j] or abs(board[i] - board[j]) == j - i:
					conflicts += 1
		return float(conflicts)

	def neighbors(self, rng: random.Random, board: tuple, count: Optional[int] = None) -> list:
		if count is None:
			moves = [
				(row, col)
				for row in range(self.size)
				for col in range(self.size)
				if col != board[row]
			]
			rng.shuffle(moves)
			return moves
		moves = []
		for _ in range(count):
			row = rng.randrange(self.size)
			col = rng.randrange(self.size - 1)
			if col >= board[row]:
				col += 1
			moves.append((row, col))
		return moves

	def move(self, board: tuple, neighbor: tuple) -> tuple:
		row, col = neighbor
		return board[:row] + (col,) + board[row + 1:]

	def delta(self, board: tuple, neighbor: tuple) -> float:
		row, col = neighbor
		return float(self._row_conflicts(board, row, col) - self._row_conflicts(board, row, board[row]))

	def augmented_delta(self, board: tuple, neighbor: tuple, penalty: Penalty) -> float:
		row, col = neighbor
		added = penalty.get((row, col)) - penalty.get((row, board[row]))
		return self.delta(board, neighbor) + penalty.lambda_ * added

	def update_penalty(self, board: tuple, penalty: Penalty) -> None:
		for row, col in enumerate(board):
			penalty.increment((row, col))

	def feature_count(self, board: tuple) -> int:
		return len(board)


class ArrayQueens(EightQueens):
	"""EightQueens with the board held in a numpy array."""

	def init_solution(self, rng: random.Random) -> np.ndarray:
		return np.array(super().init_solution(rng), dtype=np.int64)

	def move(self, board: np.ndarray, neighbor: tuple) -> np.ndarray:
		row, col = neighbor
		new_board = board.copy()
		new_board[row] = col
		return new_board


class ScriptedProblem:
	"""
	Lookup-table problem: every param sees the same neighbor list and a
	move simply jumps to the named param.
	"""

	def __init__(self, costs: dict, moves: list, features: Optional[dict] = None):
		self.costs = costs
		self.moves = list(moves)
		self.features = features or {}
		self.neighbor_calls = 0

	def cost(self, param) -> float:
		return self.costs[param]

	def neighbors(self, rng, param, count=None) -> list:
		self.neighbor_calls += 1
		moves = list(self.moves)
		return moves if count is None else moves[:count]

	def move(self, param, neighbor):
		return neighbor

	def delta(self, param, neighbor) -> float:
		return self.costs[neighbor] - self.costs[param]

	def augmented_delta(self, param, neighbor, penalty: Penalty) -> float:
		touched = self.features.get(neighbor, ())
		return self.delta(param, neighbor) + penalty.lambda_ * penalty.total(touched)

	def update_penalty(self, param, penalty: Penalty) -> None:
		for feature in self.features.get(param, ()):
			penalty.increment(feature)

	def feature_count(self, param) -> int:
		return len(self.features.get(param, ()))


class CostOnly:
	"""Problem exposing only a cost function."""

	def cost(self, param) -> float:
		return float(param)


class FixedRandom(random.Random):
	"""Random whose uniform draws always return the same value."""

	def __init__(self, value: float):
		super().__init__(0)
		self.value = value

	def random(self) -> float:
		return self.value


@pytest.fixture
def queens() -> EightQueens:
	return EightQueens()


@pytest.fixture
def scripted() -> ScriptedProblem:
	# "start" sits in the middle; "good" is the only improving move
	return ScriptedProblem(
		costs={"start": 5.0, "good": 1.0, "flat": 5.0, "bad": 9.0},
		moves=["bad", "good", "flat"],
	)
