from .snapshots import JsonSnapshotStore

__all__ = ["JsonSnapshotStore"]
