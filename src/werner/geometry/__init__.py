"""Geometry helpers: convex hulls and triangle meshes."""

from werner.geometry.hull import convex_hull
from werner.geometry.mesh import Mesh, MeshBuilder

__all__ = [
    "Mesh",
    "MeshBuilder",
    "convex_hull",
]
