"""Simulated replay generator: no video is cut, every clip is the same placeholder."""
import logging

from poolreplay.adapters.replay.base import ReplayGenerator
from poolreplay.services.config import DEFAULT_REPLAY_URL

logger = logging.getLogger(__name__)


class SimulatedReplay(ReplayGenerator):
    def __init__(self, replay_url: str = DEFAULT_REPLAY_URL):
        self.replay_url = replay_url

    def produce(self, table) -> str:
        # a real generator would return a unique URL for the specific clip
        logger.debug("mock_replay: table %s -> %s", table.id, self.replay_url)
        return self.replay_url
