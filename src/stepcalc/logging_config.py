'''
Logging setup for the command line.
'''

import logging


def configure_logging(level='WARNING'):
    '''
    Send stepcalc logs to stderr at level, keeping library chatter down.
    '''
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)8s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        force=True)

    # prompt_toolkit is chatty at DEBUG
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('prompt_toolkit').setLevel(logging.WARNING)

    logging.getLogger('stepcalc').setLevel(log_level)
