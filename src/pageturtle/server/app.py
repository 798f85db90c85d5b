"""Dev server wiring: initial build, watchdog observer, and threaded HTTP/WebSocket server"""

from functools import partial
from pathlib import Path

from loguru import logger
from watchdog.observers import Observer
from websockets.sync.server import Server, serve as ws_serve

from pageturtle.config import POSTS_DIR, SiteConfig
from pageturtle.core.pipeline import run_build
from pageturtle.server.broadcast import Broadcaster
from pageturtle.server.responder import (
    LIVE_RELOAD_PATH,
    make_process_request,
    make_session_handler,
)
from pageturtle.server.watcher import ContentChangeHandler, Rebuilder


def make_server(output_dir: Path, broadcaster: Broadcaster, host: str = "localhost", port: int = 8000) -> Server:
    """Create the HTTP + live-reload server; one thread per connection once serving."""
    return ws_serve(
        make_session_handler(broadcaster),
        host,
        port,
        process_request=make_process_request(output_dir),
    )


def serve(
    directory: Path,
    output_dir: Path,
    config: SiteConfig,
    port: int = 8000,
    host: str = "localhost",
    ) -> None:
    """Build, then watch directory and serve output_dir until interrupted."""
    config = config.model_copy(update={"is_dev_server": True})
    build = partial(run_build, directory, output_dir, config)
    build()

    broadcaster = Broadcaster()
    handler = ContentChangeHandler(Rebuilder(build, broadcaster))
    observer = Observer()
    posts_dir = Path(directory) / POSTS_DIR
    observer.schedule(handler, str(posts_dir), recursive=True)
    observer.start()
    logger.info("Watching {} for changes", posts_dir)

    try:
        with make_server(output_dir, broadcaster, host, port) as server:
            logger.info("Serving {} at http://{}:{}/ (live reload on {})", output_dir, host, port, LIVE_RELOAD_PATH)
            server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Stopping dev server")
    finally:
        broadcaster.close()
        observer.stop()
        observer.join()
