"""podidentity - identity volumes for containerized workloads.

A host agent hands an identity context to a workload through a small
on-disk layout:
- each volume lives under a directory named by the hash of its mount path
- pod metadata and agent context stay outside the mounted subtree
- the workload only sees a socket directory and an opaque id file
"""

__version__ = "0.1.0"
