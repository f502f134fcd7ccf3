"""Image decoding, segmentation and canonical views"""
