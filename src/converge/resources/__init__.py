"""Bundled resource types."""

from .vpclattice import ServiceNetworkServiceAssociation as ServiceNetworkServiceAssociation
