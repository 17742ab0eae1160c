import logging
import math
import sys
import time

import numpy as np

from radio_maps import (
    RectiGrid, UnstructuredDomain, Serial, ThreadsEx, VectorizedBatch, StokesMap,
    intensitymap, visibilitymap, load_config, ExecutionConfig,
)
from radio_maps.runtime import reset_logging


logger = logging.getLogger(__name__)


class EllipticalGauss:
    """Elliptical Gaussian with unit flux, rotated by `angle`."""

    def __init__(self, sigma_x: float, sigma_y: float, angle: float):
        self.sigma_x = sigma_x
        self.sigma_y = sigma_y
        [self.c, self.s] = [math.cos(angle), math.sin(angle)]

    def intensity_point(self, p):
        x = self.c * p.X + self.s * p.Y
        y = -self.s * p.X + self.c * p.Y
        r2 = (x / self.sigma_x) ** 2 + (y / self.sigma_y) ** 2
        return math.exp(-0.5 * r2) / (2 * math.pi * self.sigma_x * self.sigma_y)

    def visibility_point(self, p):
        u = self.c * p.U + self.s * p.V
        v = -self.s * p.U + self.c * p.V
        q2 = (u * self.sigma_x) ** 2 + (v * self.sigma_y) ** 2
        return complex(math.exp(-2 * math.pi ** 2 * q2), 0.0)


def main(config_path=None):
    reset_logging()
    config = ExecutionConfig.from_env() if config_path is None else load_config(config_path)
    model = EllipticalGauss(2.0, 1.0, math.pi / 6)

    axes = {"X": np.linspace(-10., 10., 256), "Y": np.linspace(-10., 10., 256)}
    policies = [Serial(), ThreadsEx(), ThreadsEx("static"), VectorizedBatch()]

    reference = None
    for policy in policies:
        start = time.perf_counter()
        image = intensitymap(model, RectiGrid(axes, executor=policy), config=config)
        elapsed = time.perf_counter() - start
        if reference is None:
            reference = image
        logger.info(f"{policy!r:>28}: {elapsed:.3f} s, flux {image.data.sum():.6f}, "
                    f"max deviation {np.max(np.abs(image.data - reference.data)):.2e}")

    rng = np.random.default_rng()
    nb_samples = 60
    uv = {"U": 0.1 * rng.normal(size=nb_samples), "V": 0.1 * rng.normal(size=nb_samples),
          "Ti": np.arange(1., nb_samples + 1), "Fr": np.full(nb_samples, 230e9)}
    vis = visibilitymap(model, UnstructuredDomain(uv, executor=ThreadsEx()), config=config)
    logger.info(f"{len(vis)} visibilities, |V| in [{np.abs(vis.data).min():.3f}, {np.abs(vis.data).max():.3f}]")

    # unpolarized source: Q, U, V vanish
    zero = reference.similar()
    polarized = StokesMap(reference, zero, zero, zero)
    logger.info(polarized.summary())


if __name__ == "__main__":
    main(*sys.argv[1:])
