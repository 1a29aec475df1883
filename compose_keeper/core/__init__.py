"""
Core of compose-keeper.

It prepares compose manifests for launch and keeps track of launched instances.

Base up sequence:
    - read compose file text
      -> substitute `${VAR}` / `${VAR:-default}` variables
      -> parse into a document tree
      -> per service: resolve image source, qualify env_file / volume paths, expand ports
      -> save rewritten manifest to a temp file
    - pull `defined` images
    - docker-compose -p %instance% -f %tmp-file% up -d
    - record instance into the shared instances file

Stop sequence:
    - docker-compose -p %instance% -f %tmp-file% stop / rm
    - remove instance networks, volumes and the temp file
    - forget the instance

Used docker / docker-compose commands described in compose_interface
"""
