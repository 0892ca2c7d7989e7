# ==================================================
# examples/train_encoder.py
# ==================================================
import argparse, logging
from pathlib import Path

from bloom_text_encoder import BloomVectorEncoder, Document, EncoderConfig


def main():
    p = argparse.ArgumentParser()
    p.add_argument("corpus", help="plain text file, one document per paragraph")
    p.add_argument("out", help="directory for the model container")
    p.add_argument("--name", default="bloom")
    args = p.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    text = Path(args.corpus).read_text(encoding="utf-8")
    docs = [Document.from_text(par) for par in text.split("\n\n") if par.strip()]

    enc = BloomVectorEncoder.from_config(EncoderConfig.from_env())
    enc.train(docs)
    enc.save(args.out, args.name)

if __name__ == "__main__":
    main()
