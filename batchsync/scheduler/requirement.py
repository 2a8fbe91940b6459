"""Mapping from health status to download scope."""

from typing import assert_never

from batchsync.types import DownloadRequirement, HealthStatus


def resolve_download_requirement(status: HealthStatus) -> DownloadRequirement:
    """Choose the download scope for the current health status.

    Healthy users need the seven-day batch plus daily batches; every other
    status only needs the fourteen-day batch.
    """
    match status:
        case HealthStatus.HEALTHY:
            return DownloadRequirement.WIDE_SCOPE
        case (
            HealthStatus.UNDER_SELF_MONITORING
            | HealthStatus.PROBABLY_SICK
            | HealthStatus.ATTESTED_SICKNESS
        ):
            return DownloadRequirement.NARROW_SCOPE
        case _:
            assert_never(status)
