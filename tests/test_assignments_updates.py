# tests/test_assignments_updates.py
"""
Assignment and center-update steps of the clustering loop.
"""

from __future__ import annotations

import pytest

try:
    import torch
except Exception:  # pragma: no cover
    torch = None  # type: ignore

from chromasort.assignments import HardAssignment
from chromasort.updates import MeanUpdater, MedoidUpdater
from chromasort.distances import RedmeanDistance


pytestmark = pytest.mark.skipif(torch is None, reason="PyTorch is required for these tests")


def _t(rows):
    return torch.tensor(rows, dtype=torch.float64)


def test_hard_assignment_nearest_center():
    points = _t([[0.0, 0.0, 0.0], [0.9, 0.9, 0.9], [0.1, 0.0, 0.0]])
    centers = _t([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]])
    labels = HardAssignment().compute_assignments(points, centers)
    assert labels.tolist() == [0, 1, 0]


def test_hard_assignment_ties_go_to_first_center():
    points = _t([[0.5, 0.5, 0.5]])
    centers = _t([[0.25, 0.5, 0.5], [0.75, 0.5, 0.5], [0.5, 0.25, 0.5]])
    labels = HardAssignment().compute_assignments(points, centers)
    assert labels.tolist() == [0]

    # duplicate centers: the lower index wins
    centers = _t([[0.2, 0.2, 0.2], [0.5, 0.5, 0.5], [0.5, 0.5, 0.5]])
    assert HardAssignment().compute_assignments(points, centers).tolist() == [1]


def test_hard_assignment_distance_matrix():
    points = _t([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
    centers = _t([[0.0, 0.0, 0.0], [0.5, 0.0, 0.0], [1.0, 1.0, 1.0]])
    D = HardAssignment().distance_matrix(points, centers)
    assert D.shape == (2, 3)
    assert D.tolist() == [[0.0, 0.25, 3.0], [1.0, 0.25, 2.0]]


def test_hard_assignment_custom_metric():
    assigner = HardAssignment(RedmeanDistance())
    points = _t([[0.0, 0.0, 0.0]])
    centers = _t([[0.3, 0.0, 0.0], [0.0, 0.0, 0.3]])
    # redmean weighs blue more than red near black: red center is closer
    assert assigner.compute_assignments(points, centers).tolist() == [0]


def test_mean_updater():
    members = _t([[0.0, 0.0, 0.0], [1.0, 0.5, 0.0]])
    assert MeanUpdater().update(members).tolist() == pytest.approx([0.5, 0.25, 0.0])
    with pytest.raises(ValueError):
        MeanUpdater().update(torch.zeros(0, 3, dtype=torch.float64))


def test_medoid_updater_snaps_to_member():
    members = _t([[0.0, 0.0, 0.0], [0.4, 0.4, 0.4], [1.0, 1.0, 1.0]])
    center = MedoidUpdater().update(members)
    # mean is 0.4666..., nearest member is the middle one
    assert center.tolist() == [0.4, 0.4, 0.4]


def test_medoid_updater_tie_goes_to_first_member():
    members = _t([[0.25, 0.25, 0.25], [0.75, 0.75, 0.75]])
    assert MedoidUpdater().update(members).tolist() == [0.25, 0.25, 0.25]
    with pytest.raises(ValueError):
        MedoidUpdater().update(torch.zeros(0, 3, dtype=torch.float64))
