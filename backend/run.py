"""Run the agent with uvicorn"""
import uvicorn

from dc_agent.core.config import get_settings


def main():
    settings = get_settings()

    from dc_agent.main import app

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # LoggingConfig owns the handlers
    )


if __name__ == "__main__":
    main()
