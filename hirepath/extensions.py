from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from redis import Redis
from rq import Queue
from flask import current_app

# kwargs understood by Queue.enqueue but not by the job function itself
_RQ_KEYS = {'job_timeout', 'timeout', 'at_front', 'depends_on', 'result_ttl', 'ttl', 'meta', 'description'}


class RQWrapper:
    def __init__(self):
        self.redis = None
        self.queue = None

    def init_app(self, app):
        self.redis = None
        self.queue = None
        if not app.config.get("RQ_ENABLED", True):
            app.logger.info('RQ disabled, jobs run synchronously')
            return
        try:
            self.redis = Redis.from_url(app.config.get("REDIS_URL"))
            self.queue = Queue("default", connection=self.redis)
        except Exception:
            # if Redis is not available (dev machine, no redis server),
            # leave queue as None and fall back to synchronous execution
            app.logger.exception('Redis/RQ init failed, falling back to sync execution')
            self.redis = None
            self.queue = None

    def _run_sync(self, func, args, kwargs):
        safe_kwargs = {k: v for k, v in kwargs.items() if k not in _RQ_KEYS}
        try:
            return func(*args, **safe_kwargs)
        except Exception:
            current_app.logger.exception('Synchronous execution of %s failed', getattr(func, '__name__', func))
            # the caller keeps using the session after a failed job
            db.session.rollback()
        return None

    def enqueue(self, func, *args, **kwargs):
        # Prefer enqueueing to RQ if available, but fall back to calling
        # the function synchronously if Redis/RQ is not reachable.
        if not self.queue:
            return self._run_sync(func, args, kwargs)
        try:
            return self.queue.enqueue(func, *args, **kwargs)
        except Exception:
            current_app.logger.exception('RQ enqueue failed, falling back to sync execution')
            return self._run_sync(func, args, kwargs)


db = SQLAlchemy()
login_manager = LoginManager()
rq = RQWrapper()
