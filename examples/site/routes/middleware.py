import logging

from burrow.server.terminal import format_request_line

logger = logging.getLogger("site")


async def log_request(request, next):
    logger.info(format_request_line(request.method, request.path, request.file_path))
    return await next(request)


middleware = log_request
