async def cache_one_year(request, next):
    response = await next(request)
    return response.with_header("Cache-Control", "public, max-age=31536000")


middleware = [cache_one_year]
