from workgraph_cli.main import main

main()
