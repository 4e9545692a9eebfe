"""Data models for Release View."""

from __future__ import annotations

import enum


class ResourceKind(enum.Enum):
    DEPLOYMENT = "Deployment"
    STATEFUL_SET = "StatefulSet"
    DAEMON_SET = "DaemonSet"
    SERVICE = "Service"
    INGRESS = "Ingress"
    SECRET = "Secret"
    OTHER = "other"

    @classmethod
    def from_str(cls, s: str) -> ResourceKind:
        """Map a manifest ``kind`` to a tag; matching is exact and case-sensitive."""
        for member in cls:
            if member is not cls.OTHER and member.value == s:
                return member
        return cls.OTHER
