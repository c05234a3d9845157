from traffic_stitcher.application.use_cases.stitch_service import StitchService
from traffic_stitcher.infrastructure.adapters.bundles.stitch import get_stitch_adapter_bundle


def get_stitch_service() -> StitchService:
    """Compose the StitchService at Presentation layer using adapter providers.

    The manifest directory comes from ``TEMP_DIR``.
    """
    return StitchService(get_stitch_adapter_bundle())
