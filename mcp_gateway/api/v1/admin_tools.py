"""
工具管理 API

动态工具注册、注销、生命周期管理，仅管理员可用
"""

from fastapi import APIRouter, status

from mcp_gateway.api.deps import AdminPrincipal, AdminService
from mcp_gateway.tools.schemas import (
    AdminToolListResponse,
    AdminToolView,
    ToolActionResponse,
    ToolRegisterRequest,
    ToolRegisterResponse,
)

router = APIRouter()


@router.post(
    "/register",
    response_model=ToolRegisterResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
)
def register_tool(
    request: ToolRegisterRequest,
    principal: AdminPrincipal,
    service: AdminService,
) -> ToolRegisterResponse:
    """
    注册动态工具

    新工具为草稿状态，发布后才会出现在清单中
    """
    return service.register_dynamic_tool(request, operator=principal.user_id)


@router.get("", response_model=AdminToolListResponse, response_model_by_alias=True)
def list_tools(principal: AdminPrincipal, service: AdminService) -> AdminToolListResponse:
    """所有工具（含完整元数据）"""
    tools = service.list_tools()
    return AdminToolListResponse(tools=tools, total=len(tools))


@router.delete("/{tool_name}", response_model=ToolActionResponse, response_model_by_alias=True)
def unregister_tool(
    tool_name: str,
    principal: AdminPrincipal,
    service: AdminService,
) -> ToolActionResponse:
    """注销工具"""
    service.unregister(tool_name, operator=principal.user_id)
    return ToolActionResponse(message="Tool unregistered successfully", tool_name=tool_name)


@router.post("/{tool_name}/publish", response_model=AdminToolView, response_model_by_alias=True)
def publish_tool(tool_name: str, principal: AdminPrincipal, service: AdminService) -> AdminToolView:
    """发布工具"""
    return service.publish(tool_name, operator=principal.user_id)


@router.post("/{tool_name}/offline", response_model=AdminToolView, response_model_by_alias=True)
def offline_tool(tool_name: str, principal: AdminPrincipal, service: AdminService) -> AdminToolView:
    """下架工具"""
    return service.offline(tool_name, operator=principal.user_id)


@router.post("/{tool_name}/submit", response_model=AdminToolView, response_model_by_alias=True)
def submit_tool(tool_name: str, principal: AdminPrincipal, service: AdminService) -> AdminToolView:
    """提交审核"""
    return service.submit(tool_name, operator=principal.user_id)


@router.post("/{tool_name}/reject", response_model=AdminToolView, response_model_by_alias=True)
def reject_tool(tool_name: str, principal: AdminPrincipal, service: AdminService) -> AdminToolView:
    """审核拒绝"""
    return service.reject(tool_name, operator=principal.user_id)
