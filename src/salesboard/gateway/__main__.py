"""CLI 入口模块 -- python -m salesboard.gateway [host] [port]"""

import os
import sys

import uvicorn


def main() -> None:
    """启动网关"""
    host = sys.argv[1] if len(sys.argv) > 1 else os.environ.get("SALESBOARD_HOST", "127.0.0.1")
    port_arg = sys.argv[2] if len(sys.argv) > 2 else os.environ.get("SALESBOARD_PORT", "8000")
    try:
        port = int(port_arg)
    except ValueError:
        print(f"无效端口: {port_arg}")
        sys.exit(1)

    uvicorn.run("salesboard.gateway.main:app", host=host, port=port)


if __name__ == "__main__":
    main()
