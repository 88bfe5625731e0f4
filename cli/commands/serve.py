import click
import uvicorn
from core.config import settings

@click.command()
@click.option('--host', default=settings.api_host, show_default=True)
@click.option('--port', type=int, default=settings.api_port, show_default=True)
@click.option('--reload', is_flag=True, help='Reload on code changes')
def serve(host: str, port: int, reload: bool):
    """Run the HTTP API"""
    uvicorn.run("api.main:app", host=host, port=port, reload=reload, log_level=settings.log_level.lower())
