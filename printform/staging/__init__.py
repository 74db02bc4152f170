from printform.staging.committer import CommitReport, VerificationCommitter, VerifiedRecord
from printform.staging.models import PendingVerification
from printform.staging.store import StagingRegistry, StagingStore

__all__ = [
    "CommitReport",
    "PendingVerification",
    "StagingRegistry",
    "StagingStore",
    "VerificationCommitter",
    "VerifiedRecord",
]
