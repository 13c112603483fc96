import pytest

from tensormap import config


def test_setters_update_module_globals():
    config.set_default_placeholder("_")
    config.set_reduce_chunk_size(3)
    config.set_warn_on_index_collision(True)
    assert config.DEFAULT_PLACEHOLDER == "_"
    assert config.REDUCE_CHUNK_SIZE == 3
    assert config.WARN_ON_INDEX_COLLISION is True
    config.set_reduce_chunk_size(None)
    assert config.REDUCE_CHUNK_SIZE is None


def test_setters_validate():
    with pytest.raises(TypeError):
        config.set_default_placeholder(0)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        config.set_reduce_chunk_size(0)
