from gatehouse.ui.pages.dashboard import dashboard_page
from gatehouse.ui.pages.login import login_page

__all__ = ["dashboard_page", "login_page"]
