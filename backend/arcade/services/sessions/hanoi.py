from typing import List

from arcade.errors import ConfigurationError
from arcade.models import GameKey
from arcade.services.scoring.codec import HanoiPolicy, hanoi_min_moves, hanoi_score
from .base import GameSession, SessionState

ROD_COUNT = 3
DESTINATION_ROD = 2


def _is_rod(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < ROD_COUNT


class HanoiSession(GameSession):
    """Tower of Hanoi: disks start on rod 0 and must end on rod 2 in the same order.

    Disks are integers, larger number = larger disk; each rod lists its disks
    bottom to top. There is no countdown; completion is detected on the move
    that finishes the puzzle.
    """

    game = GameKey.TOWER_OF_HANOI

    def __init__(self, disk_choices=(3, 4, 5, 6), policy=HanoiPolicy.RATIO, **kwargs):
        super().__init__(**kwargs)
        self.disk_choices = tuple(disk_choices)
        self.policy = HanoiPolicy(policy)
        self.disks = self.disk_choices[0]
        self.rods: List[List[int]] = [[] for _ in range(ROD_COUNT)]
        self.moves = 0

    @property
    def min_moves(self) -> int:
        return hanoi_min_moves(self.disks)

    @property
    def step(self) -> int:
        return self.moves

    def configure(self, disks=None) -> None:
        with self._lock:
            self._require(SessionState.CONFIGURING, 'configure')
            if disks is None:
                return
            if isinstance(disks, bool) or not isinstance(disks, int) or disks not in self.disk_choices:
                raise ConfigurationError(
                    f"disks must be one of {', '.join(str(d) for d in self.disk_choices)}"
                )
            self.disks = disks

    def start(self) -> None:
        with self._lock:
            self._require(SessionState.CONFIGURING, 'start')
            self.rods = [list(range(self.disks, 0, -1)), [], []]
            self.moves = 0
            self.state = SessionState.IN_PROGRESS

    def can_move(self, from_rod, to_rod) -> bool:
        if not (_is_rod(from_rod) and _is_rod(to_rod)) or from_rod == to_rod:
            return False
        source, target = self.rods[from_rod], self.rods[to_rod]
        if not source:
            return False
        return not target or source[-1] < target[-1]

    def move(self, from_rod, to_rod) -> bool:
        """Move the top disk of from_rod onto to_rod; False (and no change) if illegal."""
        with self._lock:
            self._require(SessionState.IN_PROGRESS, 'move')
            if not self.can_move(from_rod, to_rod):
                self.last_result = {'accepted': False, 'from': from_rod, 'to': to_rod}
                return False
            disk = self.rods[from_rod].pop()
            self.rods[to_rod].append(disk)
            self.moves += 1
            self.last_result = {'accepted': True, 'from': from_rod, 'to': to_rod, 'disk': disk}
            if self.is_solved():
                self._complete(hanoi_score(self.moves, self.disks, self.policy))
            return True

    def is_solved(self) -> bool:
        return self.rods[DESTINATION_ROD] == list(range(self.disks, 0, -1))

    def to_dict(self):
        payload = super().to_dict()
        payload.update({
            'disks': self.disks,
            'rods': [list(rod) for rod in self.rods],
            'moves': self.moves,
            'minMoves': self.min_moves,
            'policy': self.policy.value,
        })
        return payload
