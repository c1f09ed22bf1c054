"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.database.db_setting import Database
from src.service.ordering.driven_adapter.repo.order_query_repo_impl import OrderQueryRepoImpl
from src.service.ordering.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Database (session maker comes from the event-loop-aware engine manager)
    database = providers.Singleton(Database)

    # Read-side repository (stateless - opens a session per call)
    # Write-side repositories live on the unit of work, see get_unit_of_work
    order_query_repo = providers.Singleton(
        OrderQueryRepoImpl, session_factory=database.provided.session
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()
