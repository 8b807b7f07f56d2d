"""Plugin record model for persisting plugin settings."""
import json
from collections import OrderedDict
from datetime import datetime
from typing import Dict, Mapping, Optional

from sqlalchemy import Column, DateTime, Integer, String, Text

from pluginsettings.extensions import db


class Plugin(db.Model):
    """Persisted settings of one plugin, stored as a JSON object with explicit nulls."""

    __tablename__ = "plugins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plugin_id = Column(String(255), unique=True, nullable=False)
    configuration = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def get_configuration_values(self) -> Dict[str, Optional[str]]:
        """Decode the stored configuration, keeping key order and null values."""
        if not self.configuration:
            return OrderedDict()
        return json.loads(self.configuration, object_pairs_hook=OrderedDict)

    def set_configuration_values(self, values: Mapping[str, Optional[str]]) -> None:
        self.configuration = json.dumps(OrderedDict(values))

    def __repr__(self):
        return f"<Plugin {self.plugin_id} (id={self.id})>"
