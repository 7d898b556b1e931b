"""
Nearest-neighbour matching of face descriptors.

Descriptors come from an external extraction model as fixed-length float
vectors. Matching is a linear scan over the gallery, which is fine for a
class-sized set of enrolled students.
"""
from collections import namedtuple

import numpy as np

from services.errors import ValidationError

DEFAULT_THRESHOLD = 0.6

FaceMatch = namedtuple("FaceMatch", ["identity", "distance"])


def as_descriptor(values):
    try:
        vector = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError):
        raise ValidationError("Face descriptor must be a list of numbers")
    if vector.ndim != 1 or vector.size == 0:
        raise ValidationError("Face descriptor must be a non-empty flat list")
    if not np.all(np.isfinite(vector)):
        raise ValidationError("Face descriptor contains non-finite values")
    return vector


def match_face(probe, gallery, threshold=DEFAULT_THRESHOLD):
    """
    Find the enrolled identity closest to probe.

    gallery is a sequence of (identity, descriptor) pairs. Returns a
    FaceMatch when the smallest Euclidean distance is strictly below
    threshold, otherwise None. On equal distances the earliest entry wins.
    """
    if not gallery:
        return None

    probe = as_descriptor(probe)
    identities = []
    descriptors = []
    for identity, descriptor in gallery:
        descriptor = as_descriptor(descriptor)
        if descriptor.shape != probe.shape:
            raise ValidationError(
                f"Descriptor length mismatch: expected {probe.size}, got {descriptor.size}"
            )
        identities.append(identity)
        descriptors.append(descriptor)

    distances = np.linalg.norm(np.vstack(descriptors) - probe, axis=1)
    best = int(np.argmin(distances))  # argmin keeps the first minimum
    distance = float(distances[best])
    if distance < threshold:
        return FaceMatch(identities[best], distance)
    return None


def recognize_face(probe, gallery, threshold=DEFAULT_THRESHOLD):
    """match_face wrapped into a {success, user, distance, message} result."""
    match = match_face(probe, gallery, threshold)
    if match is None:
        return {
            "success": False,
            "message": "Face not recognized. Please try again or register first.",
        }
    user = match.identity
    name = getattr(user, "name", None) or str(user)
    return {
        "success": True,
        "user": user,
        "distance": match.distance,
        "message": f"Welcome, {name}!",
    }
