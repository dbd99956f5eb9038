from fastapi import APIRouter, Depends

from gatewayctl.modules.gateway import GatewayController, get_controller

router = APIRouter(prefix="/api/kubernetes", tags=["kubernetes"])


@router.get("/status")
def kubernetes_status(controller: GatewayController = Depends(get_controller)):
    """Report the active cluster context, or that the cluster is disabled."""
    return controller.cluster_status().to_dict()
