from backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from backend.app.models.quote import Quote  # noqa: F401
from backend.app.models.setting import Setting  # noqa: F401
from backend.app.models.estimator import Estimator  # noqa: F401
