#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os
import logging
import configparser

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = '../config.ini'

DEFAULT_CONFIG = {
    'TUIO': {
        'Host': '127.0.0.1',
        'Port': '3333',
        'Source': '',
    },
    'SURFACE': {
        'Width': '1920',
        'Height': '1080',
        'FingerRecognitionSupported': 'yes',
        'TagRecognitionSupported': 'yes',
    },
    'LOOP': {
        'TickRate': '60',
    },
    'LOGGING': {
        'Level': 'INFO',
        'LogFile': '',
    },
}


def get_default_config_path():
    return os.path.normpath(os.path.join(os.path.dirname(__file__), CONFIG_FILE_NAME))


class PixelTUIOConfig:
    """ Settings of the TUIO server, the touch surface and the polling loop

        All values are read from an ini file. Missing files, sections or options fall back to DEFAULT_CONFIG.
        Values that can not be converted raise a ValueError right when the file is read.
    """

    def __init__(self, config_path=None):
        self.config_path = config_path if config_path is not None else get_default_config_path()

        config = configparser.ConfigParser()
        config.read_dict(DEFAULT_CONFIG)
        read_files = config.read(self.config_path)

        if read_files:
            logger.info('Successfully read data from config file %s', self.config_path)
        else:
            logger.info('No config file found at %s, using default settings', self.config_path)

        try:
            self.host = config['TUIO']['Host'].strip()
            self.port = config['TUIO'].getint('Port')
            self.source = config['TUIO']['Source'].strip() or None

            self.surface_width = config['SURFACE'].getfloat('Width')
            self.surface_height = config['SURFACE'].getfloat('Height')
            self.finger_recognition_supported = config['SURFACE'].getboolean('FingerRecognitionSupported')
            self.tag_recognition_supported = config['SURFACE'].getboolean('TagRecognitionSupported')

            self.tick_rate = config['LOOP'].getfloat('TickRate')

            self.log_level = config['LOGGING']['Level'].strip().upper()
            self.log_file = config['LOGGING']['LogFile'].strip() or None
        except ValueError as error:
            raise ValueError('Invalid value in config file {}: {}'.format(self.config_path, error)) from error

        if self.surface_width <= 0 or self.surface_height <= 0:
            raise ValueError('Surface dimensions must be positive, got {}x{}'.format(self.surface_width,
                                                                                     self.surface_height))
        if self.tick_rate <= 0:
            raise ValueError('TickRate must be positive, got {}'.format(self.tick_rate))

    def get_tick_period(self):
        return 1.0 / self.tick_rate

    def __repr__(self):
        return 'PixelTUIOConfig(target={}:{}, surface={}x{}, tick_rate={})'.format(
            self.host, self.port, self.surface_width, self.surface_height, self.tick_rate)
