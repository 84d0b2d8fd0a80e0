"""商店前台 Flask 應用：購物車、收藏、登入與管理後台。"""

from __future__ import annotations

import atexit
import logging
from typing import Optional

import requests
from flask import Flask

from .common.services import logging as event_log
from .config import StorefrontConfig
from .routes import api, dashboard, user
from .services import StoreContainer


def create_app(
    config: Optional[StorefrontConfig] = None,
    api_session: Optional[requests.Session] = None,
) -> Flask:
    config = config or StorefrontConfig.load()
    event_log.configure(config.log_level)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.secret_key
    app.config["STOREFRONT_CONFIG"] = config

    # 在處理第一個請求前完成載入
    components = StoreContainer(config, api_session=api_session).init()
    app.extensions["storefront"] = components
    atexit.register(components.dispose)

    app.register_blueprint(user.user_bp)
    app.register_blueprint(api.api_bp)
    app.register_blueprint(dashboard.dashboard_bp)

    return app


def main() -> None:
    config = StorefrontConfig.load()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    app = create_app(config)
    app.run(host="127.0.0.1", port=3000, debug=False)


if __name__ == "__main__":
    main()
