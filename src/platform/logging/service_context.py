"""
Service context extraction for distributed logging.

Every log line is prefixed with `<service>@<env>:<instance>` so that lines from
several API replicas can be told apart once aggregated.
"""

import os
import socket
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'flight-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container orchestrators set HOSTNAME to the pod/container id
    instance = os.getenv('HOSTNAME') or socket.gethostname() or 'local'
    return f'{service_name}@{deploy_env}:{instance[:12]}-{os.getpid()}'
