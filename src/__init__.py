"""debugid_uploader — stage and upload debug-ID keyed bundles and source maps."""
