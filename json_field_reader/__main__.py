from json_field_reader.cli import main

main()
