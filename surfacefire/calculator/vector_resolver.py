"""Resolution of the spread vector for each direction convention.

The beta convention measures the vector from the direction of maximum spread
as seen from the ignition point. The psi conventions measure the direction of
the fire front's outward normal. Both are tied together through the
parametric angle theta of the fire ellipse.
"""
from dataclasses import dataclass

from surfacefire.models import fire_physics as fp
from surfacefire.utilities.fire_util import DirectionConvention


@dataclass
class VectorAngles:
    beta: float
    theta: float
    psi: float


class VectorResolver:
    """Converts a direction convention into beta, theta and psi angles."""

    def __init__(self, convention: DirectionConvention):
        self.convention = convention

    def resolve(self, head_dir: float, vector_dir: float,
                f: float, g: float, h: float) -> VectorAngles:
        """Resolves the vector angles from directions measured from upslope.

        Args:
            head_dir (float): Direction of maximum spread from upslope (deg).
            vector_dir (float): Direction of interest from upslope (deg).
            f (float): Ellipse F rate factor (ft/min).
            g (float): Ellipse G rate factor (ft/min).
            h (float): Ellipse H rate factor (ft/min).
        """
        raise NotImplementedError

    def vector_rate(self, ros_beta: float, ros_psi: float) -> float:
        """Picks the spread rate reported for the vector."""
        raise NotImplementedError


class BetaVectorResolver(VectorResolver):
    def resolve(self, head_dir, vector_dir, f, g, h):
        beta = fp.calc_vector_beta(head_dir, vector_dir)
        theta = fp.calc_theta_from_beta(beta, f, g, h)
        psi = fp.calc_psi_from_theta(theta, f, h)
        return VectorAngles(beta, theta, psi)

    def vector_rate(self, ros_beta, ros_psi):
        return ros_beta


class PsiVectorResolver(VectorResolver):
    FIXED_PSI = {
        DirectionConvention.HEAD: 0.0,
        DirectionConvention.BACK: 180.0,
        DirectionConvention.FLANK: 90.0,
    }

    def psi(self, head_dir: float, vector_dir: float) -> float:
        if self.convention in self.FIXED_PSI:
            return self.FIXED_PSI[self.convention]
        return fp.calc_vector_beta(head_dir, vector_dir)

    def resolve(self, head_dir, vector_dir, f, g, h):
        psi = self.psi(head_dir, vector_dir)
        theta = fp.calc_theta_from_psi(psi, f, h)
        beta = fp.calc_beta_from_theta(theta, f, g, h)
        return VectorAngles(beta, theta, psi)

    def vector_rate(self, ros_beta, ros_psi):
        return ros_psi


_RESOLVERS = {
    DirectionConvention.HEAD: PsiVectorResolver,
    DirectionConvention.BACK: PsiVectorResolver,
    DirectionConvention.FLANK: PsiVectorResolver,
    DirectionConvention.FIRE_FRONT: PsiVectorResolver,
    DirectionConvention.POINT_SOURCE_PSI: PsiVectorResolver,
    DirectionConvention.POINT_SOURCE_BETA: BetaVectorResolver,
}


def make_vector_resolver(convention: DirectionConvention) -> VectorResolver:
    return _RESOLVERS[convention](convention)
