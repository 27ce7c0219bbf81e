async def count_view(request, next):
    store = request.plugins.store
    views = store.get("views", 0) + 1
    store.set("views", views)
    request.state["views"] = views
    return await next(request)


middleware = [count_view]
