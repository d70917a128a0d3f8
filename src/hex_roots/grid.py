from hex_roots.config import NO_MOVESET
from hex_roots.errors import GroupAssignmentError, UnknownTileError
from hex_roots.layout import hex_distance, in_bounds, neighbor_coords_odd_q


class Tile:
    def __init__(self, tile_id, q, r):
        self.id = tile_id
        self.q = q
        self.r = r
        self.group_index = None
        self.group_count = 0
        self.is_stone_tile = False
        self.unlocked = False
        self.moveset_index = NO_MOVESET

    @property
    def coord(self):
        return (self.q, self.r)

    @property
    def is_blank(self):
        return self.group_index is None

    def __repr__(self):
        return (
            f"Tile(id={self.id}, q={self.q}, r={self.r}, group={self.group_index}, "
            f"stone={self.is_stone_tile}, unlocked={self.unlocked})"
        )


class HexGrid:
    """Flat arena of tiles addressed by id; ids run row-major (``r * width + q``)."""

    def __init__(self, width, height):
        if width < 1:
            raise ValueError("Grid needs at least 1 column.")
        if height < 1:
            raise ValueError("Grid needs at least 1 row.")

        self.width = width
        self.height = height
        self.tiles = [Tile(r * width + q, q, r) for r in range(height) for q in range(width)]
        self._group_members = {}
        self._neighbor_cache = [self._compute_neighbor_slots(tile) for tile in self.tiles]

    def __len__(self):
        return len(self.tiles)

    def __iter__(self):
        return iter(self.tiles)

    def tile(self, tile_id):
        if isinstance(tile_id, bool) or not isinstance(tile_id, int) or not 0 <= tile_id < len(self.tiles):
            raise UnknownTileError(f"No tile with id {tile_id!r} on a {self.width}x{self.height} grid")
        return self.tiles[tile_id]

    def tile_at(self, q, r):
        if in_bounds(q, r, self.width, self.height):
            return self.tiles[r * self.width + q]
        return None

    def _compute_neighbor_slots(self, tile):
        slots = []
        for q, r in neighbor_coords_odd_q(tile.q, tile.r):
            neighbor = self.tile_at(q, r)
            slots.append(None if neighbor is None else neighbor.id)
        return tuple(slots)

    def neighbor_slots(self, tile_id):
        """Six neighbor ids in direction order, ``None`` where the grid ends."""

        self.tile(tile_id)
        return self._neighbor_cache[tile_id]

    def neighbor_ids(self, tile_id):
        return [n for n in self.neighbor_slots(tile_id) if n is not None]

    def neighbors(self, tile_id):
        return [self.tiles[n] for n in self.neighbor_ids(tile_id)]

    def are_adjacent(self, a, b):
        return b in self.neighbor_ids(a)

    def ids_within_radius(self, tile_id, radius):
        center = self.tile(tile_id)
        if radius <= 0:
            return {tile_id}

        found = set()
        for q in range(center.q - radius, center.q + radius + 1):
            for r in range(center.r - radius - 1, center.r + radius + 2):
                tile = self.tile_at(q, r)
                if tile is not None and hex_distance(center.coord, tile.coord) <= radius:
                    found.add(tile.id)
        return found

    def assign_group(self, tile_id, group_index):
        tile = self.tile(tile_id)
        if group_index is None or group_index < 0:
            raise GroupAssignmentError(f"Invalid group index {group_index!r} for tile {tile_id}")
        if tile.group_index is not None:
            if tile.group_index == group_index:
                return
            raise GroupAssignmentError(
                f"Tile {tile_id} already belongs to group {tile.group_index}; "
                f"refusing to reassign it to group {group_index}"
            )

        tile.group_index = group_index
        members = self._group_members.setdefault(group_index, [])
        members.append(tile_id)
        members.sort()
        for member in members:
            self.tiles[member].group_count = len(members)

    def group(self, group_index):
        return list(self._group_members.get(group_index, ()))

    def group_tiles(self, group_index):
        return [self.tiles[tile_id] for tile_id in self._group_members.get(group_index, ())]

    def groups(self):
        return {index: list(members) for index, members in sorted(self._group_members.items())}

    def group_count(self):
        return len(self._group_members)

    def ungrouped_ids(self):
        return [tile.id for tile in self.tiles if tile.group_index is None]

    def unlocked_ids(self):
        return [tile.id for tile in self.tiles if tile.unlocked]

    def validate_integrity(self):
        seen = set()
        for group_index, members in self._group_members.items():
            if not members:
                raise ValueError(f"Group {group_index} has no tiles")
            unlocked_states = set()
            for tile_id in members:
                tile = self.tiles[tile_id]
                if tile_id in seen:
                    raise ValueError(f"Tile {tile_id} appears in more than one group")
                seen.add(tile_id)
                if tile.group_index != group_index:
                    raise ValueError(
                        f"Tile {tile_id} listed in group {group_index} but tagged {tile.group_index}"
                    )
                if tile.group_count != len(members):
                    raise ValueError(
                        f"Tile {tile_id} group count {tile.group_count} != group size {len(members)}"
                    )
                unlocked_states.add(tile.unlocked)
            if len(unlocked_states) > 1:
                raise ValueError(f"Group {group_index} is partially unlocked")

        for tile in self.tiles:
            if tile.group_index is None:
                if tile.unlocked:
                    raise ValueError(f"Blank tile {tile.id} cannot be unlocked")
                if tile.group_count:
                    raise ValueError(f"Blank tile {tile.id} has a group count")
            elif tile.id not in seen:
                raise ValueError(f"Tile {tile.id} is tagged with an unknown group")
