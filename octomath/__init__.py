"""Vectors, quaternions, matrices and mesh tangent space generation for 3D rendering."""

__version__ = "0.1.0"

__all__ = ["angles", "vector", "quaternion", "matrix", "tspace_mesh", "tspace_topology", "tspace"]