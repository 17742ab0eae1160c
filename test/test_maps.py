import numpy as np
import numpy.random as random
import pytest

from radio_maps import (
    DomainMap, RectiGrid, UnstructuredDomain, zeros, elementwise,
    SizeMismatch, IndexOutOfRange, DomainMismatch,
)


rng = random.default_rng(11)


@pytest.fixture
def grid():
    return RectiGrid({"X": np.linspace(-10., 10., 8), "Y": np.linspace(-10., 10., 6)})


@pytest.fixture
def vis():
    domain = UnstructuredDomain({"U": rng.normal(size=40), "V": rng.normal(size=40)}, header="uvw")
    return DomainMap(rng.normal(size=40) + 1j * rng.normal(size=40), domain)


def test_buffer_must_fit_domain(grid):
    with pytest.raises(SizeMismatch):
        DomainMap(np.zeros(47), grid)
    with pytest.raises(SizeMismatch):
        DomainMap(np.zeros((6, 8)), grid)
    # a grid-shaped buffer is flattened row-major
    image = np.arange(48.).reshape(8, 6)
    dmap = DomainMap(image, grid)
    assert dmap[7] == image[1, 1]
    assert np.array_equal(dmap.to_array(), image)


@pytest.mark.parametrize("dtype", [float, complex, np.float32, object])
def test_zeros_has_one_value_per_point(grid, vis, dtype):
    for domain in [grid, vis.domain, grid.slice(slice(3, 9)), grid.slice((slice(0, 2),))]:
        dmap = zeros(domain, dtype)
        assert len(dmap) == len(domain)
        assert dmap.dtype == np.dtype(dtype)
        assert dmap.domain is domain


def test_index_is_bounds_checked(vis):
    vis[3] = 2. + 1j
    assert vis[3] == 2. + 1j
    with pytest.raises(IndexOutOfRange):
        vis[40]
    with pytest.raises(IndexOutOfRange):
        vis[-1]
    with pytest.raises(IndexOutOfRange):
        vis[40] = 0.


@pytest.mark.parametrize("selector", [slice(5, 25), slice(None, None, -2), [3, 0, 39, 3], np.arange(40) % 3 == 0])
def test_slice_keeps_values_with_their_points(vis, selector):
    sliced = vis[selector]
    positions = np.arange(40)[selector]
    assert np.array_equal(sliced.data, vis.data[positions])
    assert list(sliced.points()) == [vis.points()[i] for i in positions]
    assert sliced.header == "uvw"
    # values still line up with the coordinates they were computed at
    assert np.array_equal(sliced.U, vis.U[positions])


def test_slice_is_a_view_for_ranges(vis):
    window = vis.slice(slice(10, 20))
    window[0] = 99.
    assert vis[10] == 99.

    picked = vis.slice([10, 11])
    picked[0] = -1.
    assert vis[10] == 99.


def test_grid_slice_keeps_grid(grid):
    dmap = DomainMap(np.arange(48.), grid)
    sub = dmap[1:3, ::2]
    assert isinstance(sub.domain, RectiGrid)
    assert sub.shape == (2, 3)
    assert np.array_equal(sub.to_array(), dmap.to_array()[1:3, ::2])
    for [value, point] in zip(sub, sub.points()):
        assert point == dmap.points()[int(value)]


def test_elementwise_keeps_domain(grid):
    a = DomainMap(rng.random(48), grid)
    b = DomainMap(rng.random(48), RectiGrid(grid.axes))
    total = a + b
    assert total.domain.equals(grid)
    assert total.domain is grid
    assert np.allclose(total.data, a.data + b.data)
    assert np.allclose((a * b - b / 2.).data, a.data * b.data - b.data / 2.)
    assert np.allclose((-a).data, -a.data)


def test_elementwise_rejects_other_domains(grid):
    a = DomainMap(rng.random(48), grid)
    shifted = DomainMap(rng.random(48), RectiGrid({"X": grid.axis("X") + 1., "Y": grid.axis("Y")}))
    with pytest.raises(DomainMismatch):
        a + shifted
    reordered = DomainMap(rng.random(48), grid.slice(slice(None, None, -1)))
    with pytest.raises(DomainMismatch):
        elementwise(np.add, a, reordered)


def test_elementwise_with_bare_operands(grid):
    a = DomainMap(rng.random(48), grid)
    weights = rng.random(48)
    result = elementwise(lambda x, w, s: x * w + s, a, list(weights), 3.)
    assert result.domain is grid
    assert np.allclose(result.data, a.data * weights + 3.)

    # the domain comes from the first map, wherever it is
    assert (2. + a).domain is grid
    assert (weights - a).domain is grid
    assert np.allclose((weights - a).data, weights - a.data)

    with pytest.raises(SizeMismatch):
        a * np.ones(47)
    with pytest.raises(TypeError):
        elementwise(np.add, 1., 2.)


def test_apply(vis):
    amplitude = vis.apply(np.abs)
    assert amplitude.domain is vis.domain
    assert np.allclose(amplitude.data, np.abs(vis.data))


def test_axis_names_read_coordinates(vis):
    assert np.array_equal(vis.U, vis.domain.coordinates("U"))
    with pytest.raises(AttributeError):
        vis.W


def test_asarray(vis):
    assert np.array_equal(np.asarray(vis), vis.data)
    assert len(vis.similar(float)) == len(vis)


def test_grid_window_write(grid):
    dmap = zeros(grid)
    dmap[1:3, 2:4] = 1.
    expected = np.zeros((8, 6))
    expected[1:3, 2:4] = 1.
    assert np.array_equal(dmap.to_array(), expected)
    # reading the same window gives the written values, at the same points
    window = dmap[1:3, 2:4]
    assert np.all(window.data == 1.)
    assert window.domain.equals(grid.slice((slice(1, 3), slice(2, 4))))
    # the window read is a copy
    window[0] = 9.
    assert dmap.to_array()[1, 2] == 1.

    dmap[::7, :1] = np.array([[2.], [3.]])
    assert dmap.to_array()[0, 0] == 2.
    assert dmap.to_array()[7, 0] == 3.


def test_grid_window_write_to_strided_buffer(grid):
    buffer = np.zeros(96)
    dmap = DomainMap(buffer[::2], grid)
    dmap[0:2, 0:2] = 5.
    assert np.count_nonzero(buffer) == 4
    assert np.all(dmap.to_array()[0:2, 0:2] == 5.)
