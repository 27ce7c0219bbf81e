def title(slug):
    return slug.replace("-", " ").title()
