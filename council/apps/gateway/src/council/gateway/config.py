"""GatewayConfig -- Gateway 配置加载

从环境变量加载配置；非法值记录告警并回退默认值，不阻塞启动。
"""

import os

import structlog
from pydantic import BaseModel, Field, ValidationError

log = structlog.get_logger()


class GatewayConfig(BaseModel):
    """Gateway 配置 -- 从环境变量加载

    环境变量:
        COUNCIL_GATEWAY_HOST: 监听地址（默认 127.0.0.1）
        COUNCIL_GATEWAY_PORT: 监听端口（默认 3000）
    """

    host: str = Field(default="127.0.0.1", min_length=1, description="监听地址")
    port: int = Field(default=3000, ge=1, le=65535, description="监听端口")


def load_gateway_config() -> GatewayConfig:
    """从环境变量加载 Gateway 配置

    Returns:
        GatewayConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("COUNCIL_GATEWAY_HOST"):
        kwargs["host"] = val

    if val := os.environ.get("COUNCIL_GATEWAY_PORT"):
        try:
            kwargs["port"] = int(val)
        except ValueError:
            log.warning(
                "invalid_port_config",
                env_var="COUNCIL_GATEWAY_PORT",
                value=val,
                fallback=3000,
            )

    try:
        return GatewayConfig(**kwargs)
    except ValidationError as e:
        log.warning("invalid_gateway_config", error=str(e), fallback="defaults")
        return GatewayConfig()
