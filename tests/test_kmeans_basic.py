# tests/test_kmeans_basic.py
"""
Color k-means: the `cluster` function and the ColorKMeans estimator.

Covers:
- Input validation (empty input, bad k)
- Fewer colors than clusters (singleton clusters, no iteration)
- Partition properties: no empty clusters, every color in exactly one cluster
- Center policies (medoid snaps to a member, mean stays in the unit cube)
- Seed determinism and idempotent re-clustering of centers
- Estimator attributes, params and diagnostics
"""

from __future__ import annotations

import warnings
from collections import Counter

import numpy as np
import pytest

try:
    import torch
except Exception:  # pragma: no cover
    torch = None  # type: ignore

try:
    from chromasort import Color, Point, cluster, ColorKMeans
except Exception:
    ColorKMeans = None

from data_gen import make_color_blobs, make_random_colors, make_repeated_colors


pytestmark = pytest.mark.skipif(ColorKMeans is None or torch is None,
                                reason="ColorKMeans not importable")


def _member_counter(clusters):
    return Counter(m.to_tuple() for c in clusters for m in c.members)


def test_fewer_points_than_clusters_returns_singletons():
    points = [Point(0.1, 0.2, 0.3), Point(0.9, 0.8, 0.7)]
    clusters = cluster(points, 5, seed=0)

    assert len(clusters) == 2
    for c, p in zip(clusters, points):
        assert c.center == p
        assert c.members == (p,)


def test_single_point_single_cluster():
    clusters = cluster([Color(0.3, 0.3, 0.3)], 1, seed=0)
    assert len(clusters) == 1
    assert clusters[0].center == Point(0.3, 0.3, 0.3)
    assert clusters[0].population == 1


@pytest.mark.parametrize("points", [[], np.zeros((0, 3)), torch.zeros(0, 3)])
def test_empty_input_raises(points):
    with pytest.raises(ValueError):
        cluster(points, 3, seed=0)


@pytest.mark.parametrize("k,exc", [(0, ValueError), (-2, ValueError),
                                   (2.5, TypeError), ("3", TypeError), (True, TypeError)])
def test_bad_k_raises(k, exc):
    with pytest.raises(exc):
        cluster([Color(0.1, 0.1, 0.1), Color(0.9, 0.9, 0.9)], k, seed=0)


def test_out_of_range_input_raises():
    with pytest.raises(ValueError):
        cluster(np.array([[0.5, 0.5, 1.5], [0.1, 0.1, 0.1]]), 1, seed=0)


@pytest.mark.parametrize("k", [1, 3, 5, 8])
def test_partition_has_no_empty_clusters(k):
    X = make_random_colors(200, seed=11)
    clusters = cluster(X, k, seed=4)

    assert len(clusters) == k
    assert all(c.population > 0 for c in clusters)
    assert sum(c.population for c in clusters) == X.shape[0]
    assert _member_counter(clusters) == Counter(tuple(row) for row in X.tolist())


def test_medoid_centers_are_members():
    X, _, _ = make_color_blobs(n_per=40, seed=2)
    for c in cluster(X, 4, seed=9):
        assert c.center in c.members


def test_mean_centers_are_member_means():
    X = make_random_colors(150, seed=5)
    km = ColorKMeans(n_clusters=4, center_policy="mean", tol=1e-12, max_iter=300,
                     random_state=1).fit(X)
    assert km.converged_

    for c in km.clusters_:
        expected = np.mean([m.to_tuple() for m in c.members], axis=0)
        assert np.allclose(c.center.to_tuple(), expected, atol=1e-12)
        assert all(0.0 <= v <= 1.0 for v in c.center.to_tuple())


def test_mean_cluster_emptied_by_last_assignment_is_refilled():
    """
    After one mean update the middle center sits between the two outer
    groups and attracts nothing in the last assignment pass; it is moved
    onto a spare color instead of being dropped.
    """
    X = [[0.0, 0.1, 0.0], [0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 0.1, 0.0]]
    init = [(0.0, 0.6, 0.0), (0.5, 0.0, 0.0), (1.0, 0.6, 0.0)]
    km = ColorKMeans(n_clusters=3, center_policy="mean", init=init, max_iter=1,
                     random_state=0)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        km.fit(X)

    assert not [w for w in caught if "empty" in str(w.message)]
    assert len(km.clusters_) == 3
    assert _member_counter(km.clusters_) == Counter(tuple(row) for row in X)
    assert km.labels_.tolist().count(1) == 1
    assert km.clusters_[1].center in (Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 0.0))


@pytest.mark.parametrize("center_policy", ["mean", "medoid"])
def test_returned_centers_match_returned_members(center_policy):
    X = make_random_colors(120, seed=12)
    km = ColorKMeans(n_clusters=6, center_policy=center_policy, max_iter=2,
                     random_state=5).fit(X)

    assert len(km.clusters_) == 6
    for c in km.clusters_:
        members = np.array([m.to_tuple() for m in c.members])
        if center_policy == "mean":
            assert np.allclose(c.center.to_tuple(), members.mean(axis=0), atol=1e-12)
        else:
            assert c.center in c.members


def test_unknown_center_policy_raises():
    with pytest.raises(ValueError):
        cluster(make_random_colors(10, seed=0), 2, seed=0, center_policy="median")


def test_same_seed_same_result():
    X = make_random_colors(120, seed=8)
    first = cluster(X, 5, seed=123)
    second = cluster(X, 5, seed=123)
    assert first == second

    gen_a = torch.Generator().manual_seed(123)
    gen_b = torch.Generator().manual_seed(123)
    assert cluster(X, 5, gen_a) == cluster(X, 5, gen_b)


def test_reclustering_centers_is_idempotent():
    X = make_random_colors(100, seed=21)
    centers = [c.center for c in cluster(X, 6, seed=3)]

    again = cluster(centers, 6, seed=17)
    assert len(again) == 6
    assert {c.center for c in again} == set(centers)
    assert all(c.population == 1 for c in again)


def test_fewer_distinct_colors_than_clusters_warns_and_drops():
    X = make_repeated_colors([[1.0, 0.0, 0.0], [0.0, 0.0, 1.0]], repeats=10, seed=0)
    with pytest.warns(UserWarning, match="empty"):
        clusters = cluster(X, 3, seed=6)

    assert len(clusters) == 2
    assert sorted(c.population for c in clusters) == [10, 10]
    assert {c.center for c in clusters} == {Point(1.0, 0.0, 0.0), Point(0.0, 0.0, 1.0)}


@pytest.mark.parametrize("as_type", ["colors", "tuples", "tensor", "rgba"])
def test_accepts_many_input_forms(as_type):
    X = make_random_colors(30, seed=4)
    if as_type == "colors":
        points = [Color(*row) for row in X]
    elif as_type == "tuples":
        points = [tuple(row) for row in X.tolist()]
    elif as_type == "tensor":
        points = torch.from_numpy(X)
    else:
        points = np.hstack([X, np.ones((30, 1))])

    clusters = cluster(points, 3, seed=0)
    assert clusters == cluster(X, 3, seed=0)


def test_estimator_attributes(torch_device):
    X, y, G = make_color_blobs(n_per=30, seed=0)
    km = ColorKMeans(n_clusters=3, random_state=0, device=torch_device)

    with pytest.raises(RuntimeError):
        km.predict(X)

    labels = km.fit_predict(X)
    assert labels.shape == (X.shape[0],)
    assert torch.equal(labels, km.labels_)
    assert torch.equal(km.predict(X), km.labels_)
    assert km.cluster_centers_.shape == (3, 3)
    assert np.isfinite(km.inertia_) and km.inertia_ >= 0.0
    assert km.score(X) == pytest.approx(-km.inertia_)
    assert 1 <= km.n_iter_ <= km.max_iter
    assert len(km.history_) == km.n_iter_
    assert km.history_[-1].converged == km.converged_
    assert len(km.clusters_) == 3


def test_history_snapshots_are_independent():
    X = make_random_colors(80, seed=12)
    km = ColorKMeans(n_clusters=4, random_state=1, tol=0.0, max_iter=5).fit(X)

    assert len(km.history_) == 5
    last = km.history_[-1].cluster_state.centers.clone()
    km.cluster_centers_.add_(0.5)
    assert torch.equal(km.history_[-1].cluster_state.centers, last)
    ptrs = {s.cluster_state.centers.data_ptr() for s in km.history_}
    assert len(ptrs) == len(km.history_)
    assert [s.iteration for s in km.history_] == list(range(5))


def test_warm_start_from_previous_clusters():
    X, _, G = make_color_blobs(n_per=30, seed=3)
    km = ColorKMeans(n_clusters=3, init=[Point(*row) for row in G], random_state=0).fit(X)
    assert km.converged_
    labels = km.labels_.numpy()
    assert len(set(labels[:30])) == 1 and len(set(labels[30:60])) == 1


def test_params_round_trip():
    km = ColorKMeans(n_clusters=4)
    params = km.get_params()
    for key in ["n_clusters", "n_init", "center_policy", "init", "max_iter", "tol",
                "verbose", "random_state", "device"]:
        assert key in params
    assert params["center_policy"] == "medoid"
    assert params["max_iter"] == 100
    assert params["n_init"] == 20
    assert params["tol"] == pytest.approx(1e-3)

    km.set_params(n_clusters=2, center_policy="mean")
    assert km.n_clusters == 2 and km.center_policy == "mean"
    with pytest.raises(ValueError):
        km.set_params(bogus=1)


def test_verbose_prints_and_warns_on_max_iter(capsys):
    X = make_random_colors(60, seed=2)
    with pytest.warns(UserWarning, match="converge"):
        ColorKMeans(n_clusters=3, tol=0.0, max_iter=3, verbose=1, random_state=0).fit(X)
    out = capsys.readouterr().out
    assert "Initializing 3 clusters" in out
    assert "Iteration   0" in out
    assert "Total fitting time" in out


def test_silent_by_default(capsys):
    cluster(make_random_colors(40, seed=2), 3, seed=0)
    assert capsys.readouterr().out == ""


def test_restarts_keep_the_tightest_partition():
    X, _, _ = make_color_blobs(n_per=20, seed=5)
    single = ColorKMeans(n_clusters=3, n_init=1, random_state=2).fit(X)
    many = ColorKMeans(n_clusters=3, n_init=20, random_state=2).fit(X)
    # the first of the twenty runs is the single run, so restarts never do worse
    assert many.inertia_ <= single.inertia_ + 1e-12


@pytest.mark.parametrize("n_init", [0, -1, 1.5])
def test_bad_n_init_raises(n_init):
    with pytest.raises(ValueError):
        ColorKMeans(n_clusters=2, n_init=n_init).fit(make_random_colors(10, seed=0))
