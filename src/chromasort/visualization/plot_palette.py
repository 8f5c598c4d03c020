"""
Palette and color-cluster visualization utilities.

Swatch strips for palettes and ranked results, and a 3D scatter of colors
inside the RGB cube with their cluster centers.
"""

from typing import Optional, Sequence, List, Tuple
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
import numpy as np
from mpl_toolkits.mplot3d import Axes3D

from ..base.data_structures import Cluster, Color
from ..utils.validation import validate_colors


def plot_palette(colors,
                 ax: Optional[plt.Axes] = None,
                 labels: Optional[Sequence[str]] = None,
                 show_hex: bool = True,
                 title: Optional[str] = None) -> plt.Axes:
    """Draw colors as a horizontal strip of swatches.

    Args:
        colors: Colors in any form :func:`validate_colors` accepts
        ax: Matplotlib axes (created if None)
        labels: Optional text under each swatch; defaults to hex codes
        show_hex: Whether to label swatches with their hex code
        title: Plot title

    Returns:
        Matplotlib axes
    """
    rgb = validate_colors(colors).cpu().numpy()
    n_colors = rgb.shape[0]

    if ax is None:
        fig, ax = plt.subplots(figsize=(max(2, 1.2 * n_colors), 1.8))

    for i, swatch in enumerate(rgb):
        ax.add_patch(Rectangle((i, 0), 1, 1,
                               facecolor=tuple(swatch),
                               edgecolor='black',
                               linewidth=0.5))
        if labels is not None:
            text = labels[i]
        elif show_hex:
            text = Color(*swatch).to_hex()
        else:
            text = None
        if text:
            ax.text(i + 0.5, -0.15, text, ha='center', va='top', fontsize=8)

    ax.set_xlim(0, max(n_colors, 1))
    ax.set_ylim(-0.4, 1)
    ax.set_aspect('equal')
    ax.axis('off')

    if title:
        ax.set_title(title)

    return ax


def _cluster_arrays(clusters: Sequence[Cluster]) -> Tuple[np.ndarray, np.ndarray]:
    members: List[Tuple[float, float, float]] = []
    centers: List[Tuple[float, float, float]] = []
    for c in clusters:
        members.extend(m.to_tuple() for m in c.members)
        centers.append(c.center.to_tuple())
    return np.array(members, dtype=float).reshape(-1, 3), np.array(centers, dtype=float).reshape(-1, 3)


def plot_color_clusters_3d(clusters: Sequence[Cluster],
                           ax: Optional[Axes3D] = None,
                           alpha: float = 0.7,
                           center_size: int = 200,
                           point_size: int = 30,
                           elev: float = 30,
                           azim: float = 45,
                           title: Optional[str] = None) -> Axes3D:
    """Plot clustered colors inside the RGB cube.

    Every point is drawn in its own color; centers are drawn as large
    markers in their center color with a black edge.

    Args:
        clusters: Output of :func:`chromasort.cluster`
        ax: 3D axes (created if None)
        alpha: Point transparency
        center_size: Size of center markers
        point_size: Size of data points
        elev: Elevation angle
        azim: Azimuth angle
        title: Plot title

    Returns:
        3D axes
    """
    if ax is None:
        fig = plt.figure(figsize=(10, 8))
        ax = fig.add_subplot(111, projection='3d')

    members_np, centers_np = _cluster_arrays(clusters)

    if members_np.shape[0] > 0:
        ax.scatter(members_np[:, 0], members_np[:, 1], members_np[:, 2],
                   c=np.clip(members_np, 0.0, 1.0),
                   s=point_size,
                   alpha=alpha,
                   linewidth=0)

    if centers_np.shape[0] > 0:
        ax.scatter(centers_np[:, 0], centers_np[:, 1], centers_np[:, 2],
                   c=np.clip(centers_np, 0.0, 1.0),
                   marker='X',
                   s=center_size,
                   edgecolors='black',
                   linewidth=1.5,
                   label='Centers')
        ax.legend()

    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_zlim(0, 1)
    ax.set_xlabel('Red')
    ax.set_ylabel('Green')
    ax.set_zlabel('Blue')

    ax.view_init(elev=elev, azim=azim)

    if title:
        ax.set_title(title)

    return ax
