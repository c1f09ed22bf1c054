"""
Service context used as the first column of every log line.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'ordering-service')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Kubernetes sets HOSTNAME to the pod name; its last segment is the unique suffix
    pod_name = os.getenv('KUBERNETES_SERVICE_HOST') and os.getenv('HOSTNAME', '')
    instance = pod_name.rsplit('-', 1)[-1] if pod_name else str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
