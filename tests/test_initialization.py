# tests/test_initialization.py
"""
Initialization strategies: Forgy sampling and warm starts.
"""

from __future__ import annotations

import pytest

try:
    import torch
except Exception:  # pragma: no cover
    torch = None  # type: ignore

from chromasort import Color, Point, Cluster, ClusterState
from chromasort.initialization import ForgyInit, FromPreviousInit

from data_gen import make_random_colors


pytestmark = pytest.mark.skipif(torch is None, reason="PyTorch is required for these tests")


def test_forgy_picks_input_points(torch_device):
    X = torch.from_numpy(make_random_colors(50, seed=1)).to(torch_device)
    gen = torch.Generator().manual_seed(7)
    centers = ForgyInit().initialize(X, 5, generator=gen)

    assert centers.shape == (5, 3)
    for row in centers:
        assert (X == row).all(dim=1).any()


def test_forgy_is_deterministic_under_seed():
    X = torch.from_numpy(make_random_colors(50, seed=1))
    c1 = ForgyInit().initialize(X, 4, generator=torch.Generator().manual_seed(3))
    c2 = ForgyInit().initialize(X, 4, generator=torch.Generator().manual_seed(3))
    assert torch.equal(c1, c2)


def test_forgy_samples_with_replacement():
    # more draws than points is allowed and must repeat
    X = torch.tensor([[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]], dtype=torch.float64)
    centers = ForgyInit().initialize(X, 6, generator=torch.Generator().manual_seed(0))
    assert centers.shape == (6, 3)
    assert len({tuple(row.tolist()) for row in centers}) <= 2


def test_forgy_rejects_empty():
    with pytest.raises(ValueError):
        ForgyInit().initialize(torch.zeros(0, 3, dtype=torch.float64), 2)


@pytest.mark.parametrize("state_kind", ["tensor", "cluster_state", "clusters", "colors"])
def test_from_previous_accepts_many_forms(state_kind):
    rows = [[1.0, 0.0, 0.0], [0.0, 0.0, 1.0]]
    if state_kind == "tensor":
        state = torch.tensor(rows)
    elif state_kind == "cluster_state":
        state = ClusterState(torch.tensor(rows, dtype=torch.float64),
                             torch.tensor([1, 1]), n_clusters=2)
    elif state_kind == "clusters":
        state = [Cluster(center=Point(*r)) for r in rows]
    else:
        state = [Color(*r) for r in rows]

    X = torch.rand(10, 3, dtype=torch.float64)
    centers = FromPreviousInit(state).initialize(X, 2)
    assert centers.dtype == torch.float64
    assert centers.tolist() == rows


def test_from_previous_checks_count_and_type():
    X = torch.rand(10, 3, dtype=torch.float64)
    with pytest.raises(ValueError):
        FromPreviousInit(torch.zeros(3, 3)).initialize(X, 2)
    with pytest.raises(TypeError):
        FromPreviousInit("red").initialize(X, 1)
