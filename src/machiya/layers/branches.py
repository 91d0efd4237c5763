"""Sakura branch ornaments anchored to the left and right edges."""

import logging
from collections.abc import Sequence

from machiya.bands import BRANCH_COUNT, BRANCH_EDGE_OFFSET, BRANCH_ROTATION, BRANCH_SCALE, BRANCH_Y_MARGIN
from machiya.models import BranchInstance, VectorAsset
from machiya.prng import Prng

logger = logging.getLogger(__name__)


def generate(prng: Prng, width: int, height: int, assets: Sequence[VectorAsset]) -> tuple[BranchInstance, ...]:
    if not assets:
        logger.debug("No branch assets available")
        return ()

    branches = []
    for _ in range(BRANCH_COUNT.draw_int(prng)):
        asset = assets[prng.next_int(0, len(assets))]
        on_left = prng.chance()
        if on_left:
            x = prng.next(-BRANCH_EDGE_OFFSET, BRANCH_EDGE_OFFSET)
        else:
            x = prng.next(width - BRANCH_EDGE_OFFSET, width + BRANCH_EDGE_OFFSET)
        y = prng.next(BRANCH_Y_MARGIN, height - BRANCH_Y_MARGIN)
        scale = BRANCH_SCALE.draw(prng)
        rotation = BRANCH_ROTATION.draw(prng)
        flip = prng.chance()
        branches.append(BranchInstance(asset, x, y, scale, rotation, flip))
    logger.debug("Branches: %d", len(branches))
    return tuple(branches)
