# ==================================================
# =============  MODULE: dimensions  ===============
# ==================================================
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from imagemeta.core.config import DEFAULT_CONFIG
from imagemeta.core.errors import DimensionalAmbiguityError
from imagemeta.core.layout_axes import parse_spatial_order
from imagemeta.core.permutations import default_permutation
from imagemeta.utils.logger import get_logger

__all__ = ["DimensionSemantics"]

logger = get_logger(__name__, level=DEFAULT_CONFIG.log_level)


class DimensionSemantics:
    """
    Axis rules shared by images and by bare arrays viewed as images.

    Subclasses provide ``shape``, ``ndim`` and the per-variant resolvers
    ``colordim()``, ``timedim()`` and ``spatialorder()``; everything here is
    derived from those. Axis indices are 0-based and None means "no such axis".
    """

    shape: Tuple[int, ...]
    ndim: int

    def colordim(self) -> Optional[int]:
        raise NotImplementedError

    def timedim(self) -> Optional[int]:
        raise NotImplementedError

    def spatialorder(self) -> Optional[List[str]]:
        raise NotImplementedError

    # ====[ Counting ]====
    def sdims(self) -> int:
        """Number of spatial dimensions (neither color nor time)."""
        return self.ndim - (self.colordim() is not None) - (self.timedim() is not None)

    def nimages(self) -> int:
        """Number of frames along the time axis (1 without a time axis)."""
        td = self.timedim()
        return self.shape[td] if td is not None else 1

    # ====[ Spatial axes ]====
    def coords_spatial(self) -> List[int]:
        """Ascending axis indices with the color and time axes removed."""
        excluded = {self.colordim(), self.timedim()}
        return [i for i in range(self.ndim) if i not in excluded]

    def size_spatial(self) -> Tuple[int, ...]:
        shape = self.shape
        return tuple(shape[i] for i in self.coords_spatial())

    def spatialpermutation(self, to: str | Sequence[str]) -> List[int]:
        """
        Permutation of the spatial axes that puts them in the order `to`.

        The result indexes spatial axes (positions in :meth:`coords_spatial`),
        not absolute array axes.

        Raises
        ------
        DimensionalAmbiguityError
            If no spatial order is declared and there are not exactly 2 spatial dimensions.
        """
        so = self.spatialorder()
        if so is None:
            if self.sdims() != 2:
                raise DimensionalAmbiguityError(
                    "Cannot guess default spatialorder unless there are exactly 2 spatial "
                    f"dimensions (shape {tuple(self.shape)}); set the 'spatialorder' property."
                )
            so = list(DEFAULT_CONFIG.default_spatialorder)
            logger.debug(f"[spatialpermutation] No spatialorder declared, assuming {so}")
        return default_permutation(parse_spatial_order(to), so)

    def widthheight(self, p: Optional[Sequence[int]] = None) -> Tuple[int, int]:
        """
        (width, height): sizes along the spatial axes labelled "x" and "y".

        Parameters
        ----------
        p : sequence of int, optional
            Spatial permutation whose first two entries select the horizontal
            and vertical axes. Defaults to ``spatialpermutation(("x", "y"))``.
        """
        if p is None:
            p = self.spatialpermutation(DEFAULT_CONFIG.widthheight_order)
        sz = self.size_spatial()
        return sz[p[0]], sz[p[1]]
