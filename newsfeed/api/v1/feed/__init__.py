from newsfeed.api.v1.feed.router import router

__all__ = ["router"]
