from unique_validation.contexts import DocumentContext, QueryContext


def test_document_context_returns_the_document_itself():
    doc = {"name": "John"}
    assert DocumentContext(collection=None, document=doc).attempted_values() is doc


def test_query_context_lifts_set_assignments():
    ctx = QueryContext(collection=None, update={"$set": {"address": "1 Main", "general.name": "x"}})

    assert ctx.attempted_values() == {"address": "1 Main", "general.name": "x"}


def test_query_context_set_overrides_top_level_keys():
    ctx = QueryContext(collection=None, update={"address": "old", "$set": {"address": "new"}})

    assert ctx.attempted_values() == {"address": "new"}


def test_query_context_without_set_is_copied():
    update = {"$inc": {"age": 1}, "name": "John"}
    values = QueryContext(collection=None, update=update).attempted_values()

    assert values == update
    assert values is not update
