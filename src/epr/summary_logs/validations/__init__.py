from epr.summary_logs.validations.data_syntax import validate_data_syntax
from epr.summary_logs.validations.material_type import validate_material_type
from epr.summary_logs.validations.meta_syntax import validate_meta_syntax
from epr.summary_logs.validations.processing_type import validate_processing_type
from epr.summary_logs.validations.registration_number import validate_registration_number
from epr.summary_logs.validations.table_schemas import TABLE_SCHEMAS, TableSchema, get_table_schema

__all__ = [
    "TABLE_SCHEMAS",
    "TableSchema",
    "get_table_schema",
    "validate_data_syntax",
    "validate_material_type",
    "validate_meta_syntax",
    "validate_processing_type",
    "validate_registration_number",
]
