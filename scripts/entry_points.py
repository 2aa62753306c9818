"""Entry point functions for the store-translator command line tool."""

import os
import sys
import logging

# Add the parent directory to the sys path so that modules can be found
base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(base_path)


def store_translator():
    """Entry point for store-translator command."""
    from scripts.localizer_common import InitLogger, CreateArgParser, CreateOptions, CreateSync
    from PyStoreLocalizer.LocalizerError import ConfigurationError, SourceContentError
    from PyStoreLocalizer.Options import Options

    parser = CreateArgParser("Translates App Store metadata into other languages and syncs it to App Store Connect")
    args = parser.parse_args()

    logger_options = InitLogger("store-translator", args.debug)

    try:
        options : Options = CreateOptions(args)

        sync = CreateSync(options)

        try:
            summary = sync.Run()
        finally:
            sync.store.Close()
            sync.field_translator.client.Close()

        if summary.failed:
            logging.warning(f"Some locales failed: {', '.join(summary.failed)}")

    except (ConfigurationError, SourceContentError) as e:
        logging.error(str(e))
        print("Error:", e)
        sys.exit(1)

    except Exception as e:
        print("Error:", e)
        raise

    finally:
        if logger_options.file_handler:
            logging.info(f"Log written to {logger_options.log_path}")


def main():
    """Main entry point that dispatches to the store translator."""
    store_translator()

if __name__ == "__main__":
    main()
