import logging
import os
from typing import Any

separator = "".center(60, "-")

input_prefix = "".ljust(10)
expected_prefix = "===".ljust(10)
result_prefix = "-->".ljust(10)
warning_prefix = "!!!".ljust(10)

def _log_lines(level : int, text : str, prefix : str = ""):
    for line in str(text).strip().split("\n"):
        logging.log(level, f"{prefix}{line}")

def log_info(text : str, prefix : str = ""):
    _log_lines(logging.INFO, text, prefix)

def log_error(text : str, prefix : str = ""):
    _log_lines(logging.ERROR, text, prefix)

def log_test_name(test_name : str):
    logging.info(separator)
    log_info(test_name.center(len(separator)))
    logging.info(separator)

def log_input_expected_result(input : Any, expected : Any, result : Any):
    """
    Log the input of a test case with the expected and actual results, flagging a mismatch
    """
    log_info(input, prefix=input_prefix)
    log_info(expected, prefix=expected_prefix)
    log_info(result, prefix=result_prefix)
    if expected != result:
        log_error("*** UNEXPECTED RESULT! ***", prefix=warning_prefix)
    logging.info(separator)

def log_input_expected_error(input : Any, expected_error : type[Exception], result : Any):
    log_info(input, prefix=input_prefix)
    log_info(expected_error.__name__, prefix=expected_prefix)
    if not isinstance(result, expected_error):
        log_error("*** UNEXPECTED ERROR! ***", prefix=warning_prefix)
    log_info(result, prefix=result_prefix)
    logging.info(separator)

def create_logfile(results_dir : str, log_name : str, log_level : int = logging.DEBUG) -> logging.FileHandler:
    """
    Attach a file handler writing to results_dir/log_name to the root logger
    """
    file_handler = logging.FileHandler(os.path.join(results_dir, log_name), encoding='utf-8', mode='w')
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logging.getLogger('').addHandler(file_handler)
    return file_handler

def end_logfile(file_handler : logging.FileHandler):
    logging.getLogger('').removeHandler(file_handler)
    file_handler.close()
