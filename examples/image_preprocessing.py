# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Pre- and post-processing pipeline example for Stridetensor.

A batch of channel-last images is moved to channel-first layout, normalized
per channel, pooled into per-channel scores and turned into class
probabilities. The probabilities are written to JSON and read back.
"""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

import stridetensor as st


def preprocess(images: st.Tensor) -> st.Tensor:
    """Convert an ``(N, H, W, C)`` batch to normalized ``(N, C, H, W)``."""

    n, h, w, c = images.shape
    chw = images.permute(0, 3, 1, 2).contiguous()

    # one row per channel
    per_channel = chw.transpose(0, 1).reshape(c, -1)
    mean = per_channel.mean(1, keepdim=True).expand_as(per_channel)
    std = per_channel.std(1, keepdim=True).expand_as(per_channel)
    normalized = (per_channel - mean) / std
    return normalized.reshape(c, n, h, w).transpose(0, 1).contiguous()


def postprocess(batch: st.Tensor):
    """Pool spatial axes and return ``(probabilities, predicted_class)``."""

    pooled = batch.mean(3).mean(2)
    probabilities = pooled.softmax(1)
    return probabilities, probabilities.argmax(1)


def run(verbose: bool = True):
    st.manual_seed(0)
    images = st.rand(4, 8, 8, 3) * 255.0

    batch = preprocess(images)
    probabilities, classes = postprocess(batch)

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "probabilities.json"
        st.save(probabilities, path)
        restored = st.load(path)

    if verbose:
        print("normalized batch shape:", batch.shape)
        print("probabilities:")
        print(probabilities)
        print("predicted classes:", classes.tolist())
        print("round trip exact:", restored.equal(probabilities))
    return probabilities, classes


def main() -> None:  # pragma: no cover - example script
    run(verbose="--quiet" not in sys.argv)


if __name__ == "__main__":  # pragma: no cover - example script
    main()
