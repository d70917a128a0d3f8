"""Solvable level generation: grouping tiles into dependency-chained movesets."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import AbstractSet, Iterable

from hex_roots.board import Board
from hex_roots.boards.level_specs import LEVEL_STANDARD, LevelGenerationSpec
from hex_roots.boards.movesets import Moveset
from hex_roots.grid import HexGrid
from hex_roots.pathing import HexGridAdapter, shortest_paths

logger = logging.getLogger(__name__)

Costs = dict[int, float]


@dataclass(frozen=True)
class GenerationReport:
    """Summary of one generator run."""

    groups_created: int
    filler_groups: int
    movesets_merged: int
    final_stones: int
    ungrouped_tiles: int
    bailed_out: bool
    hit_group_cap: bool

    @property
    def fully_grouped(self) -> bool:
        return self.ungrouped_tiles == 0


class LevelGenerator:
    def __init__(
        self,
        seed: str,
        width: int,
        height: int,
        spec: LevelGenerationSpec = LEVEL_STANDARD,
        rng: random.Random | None = None,
    ):
        self.seed = seed
        self.width = width
        self.height = height
        self.spec = spec
        self.rng = rng or random.Random(seed)
        self.grid = HexGrid(width, height)
        self.adapter = HexGridAdapter(self.grid)

        self.ungrouped: set[int] = {tile.id for tile in self.grid}
        self.movesets: list[Moveset] = []
        self.next_group_index = 0
        self.stones = spec.starting_stones
        self.stone_pieces = 0

        self._next_moveset_index = 0
        self._movesets_merged = 0
        self._filler_groups = 0
        self.report: GenerationReport | None = None

    def _pick(self, options: Iterable[int]) -> int:
        ordered = sorted(options)
        return ordered[self.rng.randrange(len(ordered))]

    def find_ungrouped_within(
        self,
        tile_id: int,
        distance: float,
        cost_override: AbstractSet[int] = frozenset(),
    ) -> Costs:
        costs = shortest_paths(self.adapter, tile_id, distance, cost_override)
        return {
            other: cost
            for other, cost in costs.items()
            if other != tile_id and self.grid.tiles[other].group_index is None
        }

    def tiles_made_closer_by(self, start_id: int, move: Iterable[int]) -> Costs:
        """Ungrouped tiles that are cheaper to reach from ``start_id`` only because ``move`` is grouped."""

        budget = self.stones - 1
        with_move = self.find_ungrouped_within(start_id, budget)
        without_move = self.find_ungrouped_within(start_id, budget, frozenset(move))
        return {
            tile_id: cost
            for tile_id, cost in with_move.items()
            if tile_id not in without_move or without_move[tile_id] > cost
        }

    def commit_group(self, tile_ids: list[int]) -> list[int]:
        group_index = self.next_group_index
        for tile_id in tile_ids:
            self.grid.assign_group(tile_id, group_index)
            self.ungrouped.discard(tile_id)
        self.next_group_index += 1
        return tile_ids

    def create_group(
        self,
        seed_id: int,
        dependent_move: list[int] | None = None,
        disallowed: AbstractSet[int] = frozenset(),
    ) -> list[int] | None:
        if self.next_group_index >= self.spec.max_group_index:
            return None

        remaining = float(self.stones - 1)
        candidates = {
            tile_id: cost
            for tile_id, cost in self.find_ungrouped_within(seed_id, remaining).items()
            if tile_id not in disallowed
        }
        if not candidates:
            return None

        chosen: list[int] = []

        def take(tile_id, cost):
            nonlocal candidates, remaining
            chosen.append(tile_id)
            remaining -= cost
            candidates = {
                other: other_cost
                for other, other_cost in candidates.items()
                if other != tile_id and other_cost <= remaining
            }

        if dependent_move is not None:
            newly_reachable = {
                tile_id: cost
                for tile_id, cost in self.tiles_made_closer_by(seed_id, dependent_move).items()
                if tile_id not in disallowed
            }
            if not newly_reachable:
                logger.debug("No tiles depend on move %s from tile %s", dependent_move, seed_id)
                return None
            picked = self._pick(newly_reachable)
            take(picked, newly_reachable[picked])

        # Greedy fill: exact budget matching is a subset-sum search, so settle for
        # random picks that still fit.
        while candidates and remaining > 0:
            picked = self._pick(candidates)
            take(picked, candidates[picked])

        chosen.append(seed_id)
        return self.commit_group(chosen)

    def _all_footprints(self, exclude: Iterable[Moveset] = ()) -> set[int]:
        excluded = list(exclude)
        footprint = set()
        for moveset in self.movesets:
            if any(moveset is other for other in excluded):
                continue
            footprint.update(moveset.footprint)
        return footprint

    def _new_moveset(self, move: list[int]) -> Moveset:
        moveset = Moveset(self.grid, self.stones, self._next_moveset_index)
        self._next_moveset_index += 1
        moveset.add_move(move)
        return moveset

    def add_moveset(self, respect_footprints: bool = True) -> Moveset | None:
        footprints = self._all_footprints() if respect_footprints else set()
        available = self.ungrouped - footprints
        if not available:
            return None

        preferred = [
            tile_id
            for tile_id in available
            if all(neighbor in available for neighbor in self.grid.neighbor_ids(tile_id))
        ]
        base_tile = self._pick(preferred or available)

        move = self.create_group(base_tile, None, footprints)
        if move is None:
            return None
        return self._new_moveset(move)

    def create_new_movesets(self, respect_footprints: bool = True) -> bool:
        created = 0
        target = self.spec.stone_pieces_per_stone
        for _ in range(self.spec.moveset_spawn_attempts):
            if len(self.movesets) >= target:
                break
            moveset = self.add_moveset(respect_footprints)
            if moveset is not None:
                self.movesets.append(moveset)
                created += 1
        logger.info("Created %s new movesets (%s active)", created, len(self.movesets))
        return created > 0

    def select_next_base_tile(
        self,
        moveset: Moveset,
        disallowed: AbstractSet[int] = frozenset(),
        use_most_recent_move: bool = False,
    ) -> tuple[int, list[int]] | None:
        index = len(moveset.moves) - 1
        if not use_most_recent_move:
            while index > 0 and self.rng.random() < self.spec.older_move_chance:
                index -= 1

        dependent_move = moveset.moves[index]
        starting_tiles = set()
        for tile_id in dependent_move:
            starting_tiles.update(self.find_ungrouped_within(tile_id, self.stones - 1))
        starting_tiles -= set(disallowed)
        starting_tiles -= set(dependent_move)
        if not starting_tiles:
            logger.debug("No starting tiles near move %s of moveset %s", dependent_move, moveset.index)
            return None
        return self._pick(starting_tiles), dependent_move

    def try_join_movesets(self, joiner: Moveset, receiver: Moveset, encroaching_tile: int) -> list[int] | None:
        """Build a move from ``encroaching_tile`` that needs the receiver's tiles to be reachable."""

        start_options = self.tiles_made_closer_by(encroaching_tile, receiver.tiles)
        if not start_options:
            return None
        start_tile = self._pick(start_options)
        other_footprints = self._all_footprints(exclude=(joiner, receiver))
        return self.create_group(start_tile, [encroaching_tile], other_footprints)

    def _merge_encroached(self, moveset: Moveset, move: list[int]) -> None:
        for other in list(self.movesets):
            if other is moveset:
                continue
            encroaching = other.encroaching_tiles(move)
            if not encroaching:
                continue

            logger.info("Joining moveset %s into moveset %s", other.index, moveset.index)
            moveset.absorb(other)
            self.movesets.remove(other)
            self._movesets_merged += 1

            for tile_id in encroaching:
                joining_move = self.try_join_movesets(moveset, other, tile_id)
                if joining_move is None:
                    continue
                moveset.add_move(joining_move)
                break

    def _increase_stones(self) -> None:
        self.stone_pieces = 0
        self.stones += 1
        logger.info("Generator capacity increased to %s stones", self.stones)
        for moveset in self.movesets:
            moveset.set_stones(self.stones)
        self.create_new_movesets()

    def _fill_leftovers(self) -> None:
        for tile_id in sorted(self.ungrouped):
            if tile_id not in self.ungrouped:
                continue
            if self.next_group_index >= self.spec.max_group_index:
                break
            move = self.create_group(tile_id)
            if move is None:
                move = self.commit_group([tile_id])
            self._new_moveset(move)
            self._filler_groups += 1

    def generate(self) -> HexGrid:
        spec = self.spec
        attempts_since_progress = 0
        allow_non_min_movesets = False
        bailed_out = False

        self.create_new_movesets()

        while len(self.ungrouped) >= self.stones and self.next_group_index < spec.max_group_index:
            attempts_since_progress += 1
            if attempts_since_progress > spec.max_attempts_since_progress:
                if allow_non_min_movesets:
                    bailed_out = True
                    logger.info("Generation stalled with %s ungrouped tiles", len(self.ungrouped))
                    break
                allow_non_min_movesets = True
                attempts_since_progress = 0

            if not self.movesets:
                self.create_new_movesets(respect_footprints=not allow_non_min_movesets)
                continue

            targets = self.movesets
            if not allow_non_min_movesets:
                min_pieces = min(moveset.stone_pieces for moveset in self.movesets)
                targets = [moveset for moveset in self.movesets if moveset.stone_pieces == min_pieces]
            moveset = targets[self.rng.randrange(len(targets))]

            threshold = self.stones ** spec.stone_pacing_exponent
            create_stone_move = (
                self.stones < spec.max_stones
                and self.rng.random() * len(moveset.tiles) > threshold
            )

            picked = self.select_next_base_tile(moveset, use_most_recent_move=create_stone_move)
            if picked is None:
                continue
            base_tile, dependent_move = picked
            move = self.create_group(base_tile, dependent_move)
            if move is None:
                continue
            moveset.add_move(move)

            attempts_since_progress = 0
            allow_non_min_movesets = False

            if create_stone_move:
                for tile_id in move:
                    self.grid.tiles[tile_id].is_stone_tile = True
                moveset.stone_pieces += 1
                self.stone_pieces += 1

            if self.stone_pieces == spec.stone_pieces_per_stone:
                self._increase_stones()

            self._merge_encroached(moveset, move)

        groups_from_loop = self.next_group_index
        if spec.fill_leftovers:
            self._fill_leftovers()

        self.report = GenerationReport(
            groups_created=groups_from_loop,
            filler_groups=self._filler_groups,
            movesets_merged=self._movesets_merged,
            final_stones=self.stones,
            ungrouped_tiles=len(self.ungrouped),
            bailed_out=bailed_out,
            hit_group_cap=self.next_group_index >= spec.max_group_index,
        )
        logger.info("Generated %sx%s board from seed %r: %s", self.width, self.height, self.seed, self.report)
        return self.grid

    def to_board(self) -> Board:
        if self.report is None:
            self.generate()
        board = Board(
            seed=self.seed,
            width=self.width,
            height=self.height,
            n_stones=self.spec.starting_stones,
            n_stone_pieces=0,
            n_stone_pieces_per_stone=self.spec.stone_pieces_per_stone,
            grid=self.grid,
        )
        board.generation_report = self.report
        return board


def generate(
    seed: str,
    width: int,
    height: int,
    spec: LevelGenerationSpec = LEVEL_STANDARD,
) -> Board:
    """Generate a board; the result depends only on the arguments."""

    generator = LevelGenerator(seed, width, height, spec)
    generator.generate()
    return generator.to_board()


__all__ = [
    "GenerationReport",
    "LevelGenerator",
    "generate",
]
