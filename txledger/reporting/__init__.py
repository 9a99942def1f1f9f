"""txledger.reporting — snapshot output for the rendering collaborator."""

from txledger.reporting.snapshot import SnapshotRow as SnapshotRow
from txledger.reporting.snapshot import project_row as project_row
from txledger.reporting.snapshot import write_snapshot as write_snapshot
