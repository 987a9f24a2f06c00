#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os
import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_level='INFO', log_path=None):
    level = getattr(logging, str(log_level).upper(), None)
    if not isinstance(level, int):
        raise ValueError('Unknown log level: {}'.format(log_level))

    handlers = [logging.StreamHandler()]
    if log_path:
        log_dir = os.path.dirname(log_path)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
