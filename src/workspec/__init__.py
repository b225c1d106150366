from .errors import WorkSpecError, UnknownWorkType, UnknownField, NotAListField, ValidationError, EmptyBatch, InvalidDimension, MissingSelection
from .catalog import WorkTypeId, InputKind, ListKind, QuickEntryKind, FieldSpec, WorkTypeCatalog, Capabilities, DISPATCH_CATALOG, WORK_PERFORMED_CATALOG, CATALOGS, WORK_CATEGORIES, POPULAR_ITEMS, get_field_specs, capabilities, filter_work_items, get_blade_options, to_work_type
from .details import HoleConfig, CutArea, SawingCut, WallCut, WireCut, DemolitionArea, DetailRecord, CoreDrillingDetails, SawingDetails, GeneralDetails, set_field, append_to_list, remove_from_list, toggle_option, visible_fields
from .aggregator import inches_to_feet, perimeter, area_linear_feet, total_holes, total_linear_feet, canonical_quantity
from .quick_entry import MultiCutBatch, ChainsawBatch, BreakAndRemoveBatch, JackhammerBatch, BrokkBatch, LinearCutTotal, AreaTotal, BrokkTotal, new_batch, batch_for_work_type, fold
from .work_order import WorkItem, WorkOrder
from .compositor import compose_description, format_work_summary
from .recommender import recommend
