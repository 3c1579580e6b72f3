"""Shared fixtures for the tracer tests."""
import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from implicit_geodesics.surfaces import SurfaceKind, SurfaceParams

GRAPH_KINDS = [
    SurfaceKind.PLANE,
    SurfaceKind.POSITIVE_CURVATURE,
    SurfaceKind.NEGATIVE_CURVATURE,
    SurfaceKind.SINUSOIDAL_LINEAR,
    SurfaceKind.SINUSOIDAL_QUADRATIC,
]


@pytest.fixture
def plane():
    return SurfaceParams(SurfaceKind.PLANE, 0.25)


@pytest.fixture
def bowl():
    return SurfaceParams(SurfaceKind.POSITIVE_CURVATURE, 0.25)


@pytest.fixture
def ripples():
    return SurfaceParams(SurfaceKind.SINUSOIDAL_QUADRATIC, 0.25)


@pytest.fixture
def wormhole():
    return SurfaceParams(SurfaceKind.WORMHOLE, 0.25)


@pytest.fixture(params=GRAPH_KINDS, ids=lambda k: k.value)
def graph_params(request):
    return SurfaceParams(request.param, 0.25)
