import logging

logger = logging.getLogger(__name__)


class Selection:
    """The player's in-progress activation on a board.

    Every newly activated tile triggers an unlock attempt. At most
    ``board.n_stones`` tiles may be active at once.
    """

    def __init__(self, board):
        self.board = board
        self._active = []

    @property
    def active_ids(self):
        return list(self._active)

    @property
    def remaining_capacity(self):
        return max(0, self.board.n_stones - len(self._active))

    def is_active(self, tile_id):
        return tile_id in self._active

    def clear(self):
        self._active = []

    def toggle(self, tile_id):
        """Flip ``tile_id``; returns True when the toggle unlocked a group."""

        tile = self.board.grid.tile(tile_id)
        if tile.unlocked:
            return False
        if tile_id in self._active:
            self._active.remove(tile_id)
            return False
        if self.remaining_capacity <= 0:
            logger.debug("Selection full (%s stones); ignoring tile %s", self.board.n_stones, tile_id)
            return False

        self._active.append(tile_id)
        unlocked = self.board.try_activate(self._active)
        if unlocked:
            self._after_unlock()
        return unlocked

    def _after_unlock(self):
        unlocked = [tile_id for tile_id in self._active if self.board.grid.tiles[tile_id].unlocked]
        group_sizes = {self.board.grid.tiles[tile_id].group_count for tile_id in unlocked}
        if any(size > 1 for size in group_sizes):
            self.clear()
        else:
            self._active = [tile_id for tile_id in self._active if tile_id not in unlocked]
