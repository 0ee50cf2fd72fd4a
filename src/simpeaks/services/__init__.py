"""Application services for embedding and driving a simulated detector."""

from simpeaks.services.driver import SimPeaksDriver

__all__ = ["SimPeaksDriver"]
