"""Remote system of record: collaborator protocol and HTTP adapter."""

from teamboard.remote.http import HttpBoardAPI
from teamboard.remote.protocol import RemoteBoardAPI

__all__ = ["HttpBoardAPI", "RemoteBoardAPI"]
