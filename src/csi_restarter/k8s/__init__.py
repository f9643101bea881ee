"""K8s API access."""

from csi_restarter.k8s.client import close_k8s_client, get_k8s_client, get_v1_client
from csi_restarter.k8s.cluster import (
    ClusterApi,
    KubernetesCluster,
    pod_to_record,
    pvc_to_record,
)

__all__ = [
    "ClusterApi",
    "KubernetesCluster",
    "close_k8s_client",
    "get_k8s_client",
    "get_v1_client",
    "pod_to_record",
    "pvc_to_record",
]
