from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from gatewayctl.modules.gateway import GatewayController, get_controller

router = APIRouter(prefix="/api/envoy-gateway", tags=["envoy-gateway"])


class ApplyRequest(BaseModel):
    config: Optional[str] = None


@router.get("/status")
def gateway_status(controller: GatewayController = Depends(get_controller)):
    return controller.gateway_status().to_dict()


@router.post("/install")
def install_gateway(controller: GatewayController = Depends(get_controller)):
    ack = controller.install()
    return {"success": ack.success, "message": ack.message}


@router.post("/uninstall")
def uninstall_gateway(controller: GatewayController = Depends(get_controller)):
    ack = controller.uninstall()
    return {"success": ack.success, "message": ack.message}


@router.get("/routes")
def list_routes(controller: GatewayController = Depends(get_controller)):
    return {"routes": [route.to_dict() for route in controller.list_routes()]}


@router.post("/apply")
def apply_config(
    req: Optional[ApplyRequest] = None,
    controller: GatewayController = Depends(get_controller),
):
    """Apply a raw manifest; cleanup problems come back as ``cleanupWarning``."""
    content = req.config if req else None
    return controller.apply_manifest(content).to_dict()
