"""
Classification service client.

Components:
- WorkerPool: fixed-size thread pool shared by all invocations
- ClassificationInvoker: deadline-guarded POST to the classification service
- build_service_url: endpoint + repeated recipients query parameters
"""

from classification_guess.client.invoker import ClassificationInvoker, build_service_url
from classification_guess.client.worker_pool import WorkerPool

__all__ = [
    "ClassificationInvoker",
    "WorkerPool",
    "build_service_url",
]
